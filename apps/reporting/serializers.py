"""
Serializers for analytics reports.
"""

from rest_framework import serializers


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.CharField()
    revenue = serializers.FloatField()


class AnalyticsReportSerializer(serializers.Serializer):
    """Wire shape of ``AnalyticsReport`` used by the dashboard clients."""

    currentMonthRevenue = serializers.FloatField(source="current_month_revenue")
    lastMonthRevenue = serializers.FloatField(source="last_month_revenue")
    currentYearRevenue = serializers.FloatField(source="current_year_revenue")
    lastYearRevenue = serializers.FloatField(source="last_year_revenue")
    totalCustomers = serializers.IntegerField(source="total_customers")
    newCustomersThisMonth = serializers.IntegerField(source="new_customers_this_month")
    totalProducts = serializers.IntegerField(source="total_products")
    monthlyRevenue = MonthlyRevenueSerializer(source="monthly_revenue", many=True)
