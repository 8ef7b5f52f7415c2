"""
CRM app: customers billed at the counter.
"""
