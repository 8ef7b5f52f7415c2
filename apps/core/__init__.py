"""
Core app: record store, error taxonomy, health checks and the desktop IPC surface.
"""
