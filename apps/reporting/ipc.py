"""
Desktop IPC channel for the analytics dashboard.
"""

from apps.core.ipc import channel

from .serializers import AnalyticsReportSerializer
from .services import AnalyticsAggregator


@channel("analytics:get")
def get_analytics(payload=None):
    return AnalyticsReportSerializer(AnalyticsAggregator().compute()).data
