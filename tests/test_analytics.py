"""
Tests for the analytics aggregator.

Windows are anchored on an explicit "now" in the configured local time zone
(Asia/Kolkata in the test settings).
"""

from datetime import datetime, timedelta

from django.utils import timezone

import pytest

from apps.crm.models import Customer
from apps.reporting.serializers import AnalyticsReportSerializer
from apps.reporting.services import AnalyticsAggregator, month_label, shift_month


def local(*args):
    """Aware datetime in the configured local time zone."""
    return timezone.make_aware(datetime(*args))


NOW = local(2024, 3, 15, 12, 0)


class TestMonthHelpers:
    """Test month arithmetic helpers."""

    def test_shift_month_rolls_year_back(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 3, -11) == (2023, 4)
        assert shift_month(2024, 3, -15) == (2022, 12)

    def test_shift_month_forward(self):
        assert shift_month(2023, 12, 1) == (2024, 1)

    def test_month_label(self):
        assert month_label(2024, 1) == "Jan"
        assert month_label(2023, 12) == "Dec"


@pytest.mark.django_db
class TestRevenueWindows:
    """Test the current/last month and year revenue figures."""

    def test_current_and_last_month_scenario(self, store, make_invoice):
        """Test 100 + 200 this month and 50 last month."""
        make_invoice(100, date=local(2024, 3, 2, 10, 0))
        make_invoice(200, date=local(2024, 3, 10, 16, 30))
        make_invoice(50, date=local(2024, 2, 20, 9, 0))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 300
        assert report.last_month_revenue == 50
        assert report.current_year_revenue == 350
        assert report.last_year_revenue == 0

    def test_first_instant_of_month_counts_to_current_month(self, store, make_invoice):
        """Test the lower boundary of the current-month window."""
        make_invoice(100, date=local(2024, 3, 1, 0, 0))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 100
        assert report.last_month_revenue == 0

    def test_instant_before_month_counts_to_last_month_only(self, store, make_invoice):
        """Test the upper boundary of the last-month window."""
        make_invoice(40, date=local(2024, 3, 1, 0, 0) - timedelta(microseconds=1))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 0
        assert report.last_month_revenue == 40

    def test_month_boundary_is_local_not_utc(self, store, make_invoice):
        """Test that 1 March 00:30 local (still February in UTC) is this month."""
        make_invoice(75, date=local(2024, 3, 1, 0, 30))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 75
        assert report.monthly_revenue[-1].revenue == 75

    def test_invoice_at_now_is_included_and_future_excluded(self, store, make_invoice):
        """Test that the current windows end at now, inclusive."""
        make_invoice(10, date=NOW)
        make_invoice(20, date=NOW + timedelta(seconds=1))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 10
        assert report.current_year_revenue == 10

    def test_naive_now_is_read_as_local_time(self, store, make_invoice):
        """Test that a naive anchor gives the same windows as the aware one."""
        make_invoice(100, date=local(2024, 3, 1, 0, 30))
        make_invoice(50, date=local(2024, 2, 20, 9, 0))

        report = AnalyticsAggregator(store).compute(now=datetime(2024, 3, 15, 12, 0))

        assert report.current_month_revenue == 100
        assert report.last_month_revenue == 50
        assert report.monthly_revenue[-1].month == "Mar"

    def test_year_rollover(self, store, make_invoice):
        """Test windows in January: last month is December of last year."""
        make_invoice(30, date=local(2023, 12, 31, 23, 59))
        make_invoice(70, date=local(2023, 1, 1, 0, 0))
        make_invoice(5, date=local(2022, 12, 31, 23, 59))
        make_invoice(15, date=local(2024, 1, 5, 8, 0))

        report = AnalyticsAggregator(store).compute(now=local(2024, 1, 10, 9, 0))

        assert report.current_month_revenue == 15
        assert report.last_month_revenue == 30
        assert report.current_year_revenue == 15
        assert report.last_year_revenue == 100

    def test_decimal_totals_are_summed_as_numbers(self, store, make_invoice):
        """Test that decimal totals with cents add up."""
        make_invoice("10.25", date=local(2024, 3, 3))
        make_invoice("0.50", date=local(2024, 3, 4))

        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == pytest.approx(10.75)
        assert isinstance(report.current_month_revenue, float)


@pytest.mark.django_db
class TestMonthlySeries:
    """Test the trailing twelve-month revenue series."""

    def test_series_has_twelve_ascending_entries_ending_now(self, store):
        """Test the shape and labels of the series."""
        report = AnalyticsAggregator(store).compute(now=NOW)

        assert [entry.month for entry in report.monthly_revenue] == [
            "Apr", "May", "Jun", "Jul", "Aug", "Sep",
            "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
        ]  # fmt: skip
        assert all(entry.revenue == 0 for entry in report.monthly_revenue)

    def test_series_buckets_by_exact_month_and_year(self, store, make_invoice):
        """Test that only the matching (month, year) is summed."""
        make_invoice(100, date=local(2024, 3, 2))
        make_invoice(50, date=local(2024, 2, 20))
        make_invoice(25, date=local(2023, 4, 1))
        # Same month a year too early falls outside the series
        make_invoice(999, date=local(2023, 3, 15))

        report = AnalyticsAggregator(store).compute(now=NOW)
        revenue = [entry.revenue for entry in report.monthly_revenue]

        assert revenue[-1] == 100
        assert revenue[-2] == 50
        assert revenue[0] == 25
        assert sum(revenue) == 175


@pytest.mark.django_db
class TestCounts:
    """Test customer and product counts."""

    def test_customer_scenario(self, store):
        """Test two customers with one created this month."""
        Customer.objects.create(name="New", mobile="9000000001")
        old = Customer.objects.create(name="Old", mobile="9000000002")
        month_start = timezone.localtime().replace(day=1, hour=0, minute=0, second=0)
        Customer.objects.filter(pk=old.pk).update(created_at=month_start - timedelta(days=3))

        report = AnalyticsAggregator(store).compute()

        assert report.total_customers == 2
        assert report.new_customers_this_month == 1

    def test_total_products(self, store, product):
        """Test counting all products."""
        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.total_products == 1

    def test_empty_store(self, store):
        """Test analytics with no data at all."""
        report = AnalyticsAggregator(store).compute(now=NOW)

        assert report.current_month_revenue == 0
        assert report.total_customers == 0
        assert report.new_customers_this_month == 0
        assert report.total_products == 0
        assert len(report.monthly_revenue) == 12


@pytest.mark.django_db
class TestAnalyticsWireFormat:
    """Test the serialized report."""

    def test_serialized_keys(self, store, make_invoice):
        """Test camelCase keys and the monthly series entries."""
        make_invoice(100, date=local(2024, 3, 2))

        data = AnalyticsReportSerializer(AnalyticsAggregator(store).compute(now=NOW)).data

        assert set(data) == {
            "currentMonthRevenue",
            "lastMonthRevenue",
            "currentYearRevenue",
            "lastYearRevenue",
            "totalCustomers",
            "newCustomersThisMonth",
            "totalProducts",
            "monthlyRevenue",
        }
        assert data["currentMonthRevenue"] == 100.0
        assert data["monthlyRevenue"][-1] == {"month": "Mar", "revenue": 100.0}

    def test_read_failure_aborts_report(self, store, monkeypatch):
        """Test that a storage failure propagates instead of a partial report."""
        from apps.core.exceptions import StorageError

        def broken_count(model):
            raise StorageError("database is locked")

        monkeypatch.setattr(store, "count", broken_count)

        with pytest.raises(StorageError):
            AnalyticsAggregator(store).compute(now=NOW)
