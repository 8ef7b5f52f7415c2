"""
View decorators shared by the ledger APIs.
"""

import logging
from functools import wraps

from rest_framework.response import Response

from .exceptions import LedgerError

logger = logging.getLogger(__name__)


def error_payload(error: LedgerError) -> dict:
    """JSON body reported for a ledger error."""
    payload = {"error": error.message}
    if error.details:
        payload["details"] = error.details
    return payload


def ledger_errors(view_func):
    """
    Decorator that reports ledger errors as JSON responses.

    The status code comes from the error class (400 validation, 404 not found,
    409 conflict, 503 storage). Anything else propagates to Django.

    Usage:
        @api_view(["POST"])
        @ledger_errors
        def create_invoice(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except LedgerError as e:
            log = logger.error if e.status_code >= 500 else logger.info
            log(f"{request.method} {request.path} failed: {e.error_type}: {e.message}")
            return Response(error_payload(e), status=e.status_code)

    return wrapper
