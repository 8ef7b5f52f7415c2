"""
Inventory app: the product catalogue sold at the counter.
"""
