"""
Reporting app: revenue and customer analytics.
"""
