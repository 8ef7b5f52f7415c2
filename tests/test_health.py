"""
Tests for health check and Prometheus metrics endpoints.
"""

from unittest.mock import patch

from django.db import OperationalError
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from apps.inventory.models import Product


class HealthCheckTestCase(TestCase):
    """Tests for the health endpoints polled by the desktop shell."""

    def setUp(self):
        self.client = Client()

    def test_health_check(self):
        response = self.client.get(reverse("core:health"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertIn("version", response.json())

    def test_health_check_rejects_post(self):
        response = self.client.post(reverse("core:health"))

        self.assertEqual(response.status_code, 405)

    def test_detailed_health_check(self):
        response = self.client.get(reverse("core:health_detailed"))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "healthy")
        self.assertEqual(data["checks"]["database"]["status"], "healthy")
        self.assertEqual(set(data["checks"]), {"database", "receipts"})

    @override_settings(RECEIPTS_ROOT="/nonexistent/receipts")
    def test_missing_receipt_directory_is_a_warning(self):
        response = self.client.get(reverse("core:health_detailed"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["checks"]["receipts"]["status"], "warning")

    def test_database_failure_returns_503(self):
        with patch("apps.core.health.connection") as mock_connection:
            mock_connection.cursor.side_effect = OperationalError("disk I/O error")
            response = self.client.get(reverse("core:health_detailed"))

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "unhealthy")


class PrometheusMetricsTestCase(TestCase):
    """Tests for the /metrics endpoint exposed by django-prometheus."""

    def test_metrics_endpoint_accessible(self):
        response = self.client.get("/metrics")

        self.assertEqual(response.status_code, 200)
        self.assertIn(b"django_http_requests", response.content)

    def test_model_operation_metrics_collected(self):
        Product.objects.create(name="Coolant", rate=90)

        response = self.client.get("/metrics")

        self.assertIn(b"django_db_execute", response.content)
