"""
Sales app for the point-of-sale ledger.

Owns invoices and their line items: period-scoped invoice numbering, the
atomic invoice-creation transaction, the invoice listing projection and
thermal receipt rendering/printing.
"""
