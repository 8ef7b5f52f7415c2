"""
Views for reporting app.
"""

from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.decorators import ledger_errors

from .serializers import AnalyticsReportSerializer
from .services import AnalyticsAggregator


@api_view(["GET"])
@ledger_errors
def analytics(request):
    """
    Revenue and customer rollups for the dashboard.

    Returns:
        {
            "currentMonthRevenue": 300.0,
            "lastMonthRevenue": 50.0,
            ...
            "monthlyRevenue": [{"month": "Apr", "revenue": 0.0}, ...]
        }
    """
    report = AnalyticsAggregator().compute()
    return Response(AnalyticsReportSerializer(report).data)
