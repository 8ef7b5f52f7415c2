"""
Tests for the customer API.
"""

from django.urls import reverse

import pytest

from apps.crm.models import Customer


@pytest.mark.django_db
class TestCustomerApi:
    """Test customer CRUD over HTTP."""

    def test_list_is_ordered_by_name(self, api_client):
        """Test that customers are listed alphabetically."""
        Customer.objects.create(name="Zoya", mobile="9000000001")
        Customer.objects.create(name="Arjun", mobile="9000000002")

        response = api_client.get(reverse("crm:customer_list"))

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Arjun", "Zoya"]

    def test_create_customer(self, api_client):
        """Test registering a customer."""
        payload = {"name": "Meena", "mobile": "9123456780", "address": "4 Lake View"}

        response = api_client.post(reverse("crm:customer_list"), payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["mobile"] == "9123456780"
        assert data["address"] == "4 Lake View"
        assert "createdAt" in data

    def test_address_is_optional(self, api_client):
        """Test creating a customer without an address."""
        response = api_client.post(
            reverse("crm:customer_list"), {"name": "Ravi", "mobile": "9000000003"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["address"] == ""

    def test_duplicate_mobile_is_a_conflict(self, api_client, customer):
        """Test that a duplicate mobile number returns 409."""
        payload = {"name": "Someone Else", "mobile": customer.mobile}

        response = api_client.post(reverse("crm:customer_list"), payload, format="json")

        assert response.status_code == 409
        assert Customer.objects.count() == 1

    def test_missing_mobile_is_rejected(self, api_client):
        """Test that the mobile number is required."""
        response = api_client.post(
            reverse("crm:customer_list"), {"name": "Nomobile"}, format="json"
        )

        assert response.status_code == 400
        assert "mobile" in response.json()["details"]

    def test_update_customer(self, api_client, customer):
        """Test updating a customer."""
        url = reverse("crm:customer_detail", args=[customer.pk])
        payload = {"name": "Asha Verma", "mobile": "9876543210", "address": "New Address"}

        response = api_client.put(url, payload, format="json")

        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.address == "New Address"

    def test_update_missing_customer_is_not_found(self, api_client):
        """Test that updating an absent id returns 404."""
        url = reverse("crm:customer_detail", args=[999])

        response = api_client.put(url, {"name": "X", "mobile": "1"}, format="json")

        assert response.status_code == 404

    def test_delete_customer(self, api_client, customer):
        """Test deleting a customer without invoices."""
        response = api_client.delete(reverse("crm:customer_detail", args=[customer.pk]))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert not Customer.objects.exists()

    def test_delete_customer_with_invoices_is_refused(self, api_client, customer, make_invoice):
        """Test that a customer referenced by invoices cannot be deleted."""
        make_invoice(100, customer=customer)

        response = api_client.delete(reverse("crm:customer_detail", args=[customer.pk]))

        assert response.status_code == 409
        assert Customer.objects.filter(pk=customer.pk).exists()
