"""
Analytics aggregation for the point-of-sale dashboard.

Revenue is rolled up from a full scan of the invoice history into fixed
windows anchored on "now" in the configured local time zone:

- current month: [start of this month, now]
- last month:    [start of last month, start of this month)
- current year:  [start of this year, now]
- last year:     [start of last year, start of this year)

plus a trailing twelve-month series ending at the current month.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple

from django.utils import dateformat, timezone

from apps.core.exceptions import LedgerError
from apps.core.store import RecordStore
from apps.crm.models import Customer
from apps.inventory.models import Product
from apps.sales.models import Invoice
from apps.sales.numbering import to_local

logger = logging.getLogger(__name__)


@dataclass
class MonthlyRevenue:
    month: str
    revenue: float


@dataclass
class AnalyticsReport:
    current_month_revenue: float = 0.0
    last_month_revenue: float = 0.0
    current_year_revenue: float = 0.0
    last_year_revenue: float = 0.0
    total_customers: int = 0
    new_customers_this_month: int = 0
    total_products: int = 0
    monthly_revenue: List[MonthlyRevenue] = field(default_factory=list)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """
    Move ``offset`` months from (year, month), rolling the year over.

    >>> shift_month(2024, 1, -1)
    (2023, 12)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    """Short month name, e.g. ``Jan``."""
    return dateformat.format(date(year, month, 1), "M")


class AnalyticsAggregator:
    """
    Computes the revenue and customer rollups shown on the dashboard.

    Every call rescans all invoices, customers and products; a failure while
    reading any of them aborts the whole report.
    """

    MONTHS_IN_SERIES = 12

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or RecordStore()

    def compute(self, now: Optional[datetime] = None) -> AnalyticsReport:
        """
        Build the analytics report.

        Args:
            now: anchor instant, defaults to the current time; a naive value is
                read as local time

        Returns:
            AnalyticsReport
        """
        now = to_local(now or timezone.now())

        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        last_year, last_month = shift_month(now.year, now.month, -1)
        last_month_start = month_start.replace(year=last_year, month=last_month)
        year_start = month_start.replace(month=1)
        last_year_start = year_start.replace(year=now.year - 1)

        try:
            with self.store.translate_errors():
                invoices = list(self.store.query(Invoice).values_list("date", "total"))
                customer_dates = list(
                    self.store.query(Customer).values_list("created_at", flat=True)
                )
                total_products = self.store.count(Product)
        except LedgerError as e:
            logger.error(f"Analytics computation failed: {e.message}")
            raise

        report = AnalyticsReport(
            total_customers=len(customer_dates),
            new_customers_this_month=sum(
                1 for created in customer_dates if month_start <= created <= now
            ),
            total_products=total_products,
        )

        # Totals arrive as decimals and are accumulated as floats
        by_month = {}
        for issued, total in invoices:
            amount = float(total)
            if month_start <= issued <= now:
                report.current_month_revenue += amount
            if last_month_start <= issued < month_start:
                report.last_month_revenue += amount
            if year_start <= issued <= now:
                report.current_year_revenue += amount
            if last_year_start <= issued < year_start:
                report.last_year_revenue += amount

            local = timezone.localtime(issued)
            key = (local.year, local.month)
            by_month[key] = by_month.get(key, 0.0) + amount

        series = []
        for i in range(self.MONTHS_IN_SERIES):
            year, month = shift_month(now.year, now.month, -i)
            revenue = by_month.get((year, month), 0.0)
            series.append(MonthlyRevenue(month=month_label(year, month), revenue=revenue))
        series.reverse()
        report.monthly_revenue = series

        logger.debug(
            f"Analytics computed over {len(invoices)} invoices and "
            f"{len(customer_dates)} customers"
        )
        return report
