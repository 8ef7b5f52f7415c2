"""
Invoice numbering policy.

Invoice numbers look like ``014/03/24``: a sequence that restarts at 001
every calendar month, then the two-digit month and the last two digits of
the year. Sequences past 999 simply widen (``1000/03/24``).

The next number is derived from the most recently created invoice of the
period, so two writers racing on the same period can compute the same
number. The unique constraint on ``Invoice.invoice_number`` turns that into
a ``DuplicateRecordError`` and the losing transaction rolls back.
"""

import logging
from datetime import datetime
from typing import Optional

from django.utils import timezone

from apps.core.store import RecordStore

from .models import Invoice

logger = logging.getLogger(__name__)


def to_local(when: datetime) -> datetime:
    """Interpret ``when`` in the configured local time zone."""
    if timezone.is_naive(when):
        return timezone.make_aware(when)
    return timezone.localtime(when)


def period_suffix(when: datetime) -> str:
    """Return the ``MM/YY`` part of an invoice number for ``when``."""
    when = to_local(when)
    return f"{when.month:02d}/{when.year % 100:02d}"


def format_invoice_number(sequence: int, when: datetime) -> str:
    """
    Format an invoice number.

    >>> format_invoice_number(14, datetime(2024, 3, 5))
    '014/03/24'
    """
    return f"{sequence:03d}/{period_suffix(when)}"


def parse_sequence(invoice_number: str) -> int:
    """
    Return the sequence segment (before the first ``/``) of an invoice number.

    Raises:
        ValueError: if the segment is not an integer
    """
    return int(invoice_number.split("/", 1)[0])


class InvoiceNumberingPolicy:
    """Derives the next invoice number for a calendar month."""

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or RecordStore()

    def next_number(self, when: Optional[datetime] = None) -> str:
        """
        Return the next invoice number for the month containing ``when``.

        Args:
            when: issue time, defaults to now

        Returns:
            Invoice number in ``SSS/MM/YY`` form
        """
        when = to_local(when or timezone.now())
        suffix = f"/{period_suffix(when)}"

        with self.store.translate_errors():
            last = list(
                self.store.query(
                    Invoice,
                    filters={"invoice_number__endswith": suffix},
                    order="-id",
                    limit=1,
                )
            )

        if not last:
            return format_invoice_number(1, when)

        try:
            sequence = parse_sequence(last[0].invoice_number) + 1
        except ValueError:
            # Unparseable number; continue after the number of invoices already issued
            logger.warning(
                f"Could not parse sequence of invoice {last[0].invoice_number!r}, "
                f"falling back to period count"
            )
            with self.store.translate_errors():
                issued = self.store.query(
                    Invoice, filters={"invoice_number__endswith": suffix}
                ).count()
            sequence = issued + 1

        return format_invoice_number(sequence, when)
