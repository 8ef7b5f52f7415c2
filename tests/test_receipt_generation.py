"""
Tests for receipt generation and printing.

- HTML thermal receipt rendering
- 80mm PDF receipt generation
- Receipt endpoints
- Saving and printing receipts
"""

import os
from unittest.mock import patch

from django.urls import reverse

import pytest

from apps.core.exceptions import StorageError
from apps.sales.receipt_service import ReceiptGenerator, ReceiptService
from apps.sales.services import InvoiceService


@pytest.fixture
def invoice(db, customer, product):
    """An invoice projected the way receipts receive it."""
    return InvoiceService().create_invoice(
        customer.pk,
        100,
        [{"productId": product.pk, "quantity": 2, "rate": 50, "total": 100}],
    )


@pytest.mark.django_db
class TestReceiptGenerator:
    """Test the ReceiptGenerator class."""

    def test_generate_pdf_receipt(self, invoice):
        """Test generating the thermal PDF receipt."""
        pdf_bytes = ReceiptGenerator(invoice).generate_pdf_receipt()

        assert isinstance(pdf_bytes, bytes)
        assert pdf_bytes.startswith(b"%PDF")

    def test_generate_html_receipt(self, invoice):
        """Test the content of the HTML receipt."""
        html_content = ReceiptGenerator(invoice).generate_html_receipt()

        assert "Test Shop" in html_content
        assert invoice.invoice_number in html_content
        assert "Asha Verma" in html_content
        assert "9876543210" in html_content
        assert "Engine Oil 1L" in html_content
        assert "100.00" in html_content
        assert "Goods once sold cannot be returned" in html_content
        assert "Visit Again" in html_content

    def test_html_receipt_escapes_names(self, invoice):
        """Test that customer input is escaped in the HTML receipt."""
        invoice.customer_details["name"] = "<script>alert(1)</script>"

        html_content = ReceiptGenerator(invoice).generate_html_receipt()

        assert "<script>" not in html_content

    def test_pdf_receipt_for_unknown_references(self, db):
        """Test that a receipt renders when customer and product are unknown."""
        invoice = InvoiceService().create_invoice(
            7, 100, [{"productId": 3, "quantity": 2, "rate": 50, "total": 100}]
        )

        assert ReceiptGenerator(invoice).generate_pdf_receipt().startswith(b"%PDF")

    def test_unsupported_output_format(self, invoice):
        """Test that an unknown output format raises ValueError."""
        with pytest.raises(ValueError):
            ReceiptService.generate_receipt(invoice, output_format="docx")


@pytest.mark.django_db
class TestReceiptViews:
    """Test the receipt endpoints."""

    def test_receipt_html_view(self, client, invoice):
        """Test the HTML receipt endpoint."""
        response = client.get(reverse("sales:receipt_html", args=[invoice.pk]))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/html")
        assert invoice.invoice_number in response.content.decode()

    def test_receipt_pdf_view(self, client, invoice):
        """Test the PDF receipt endpoint."""
        response = client.get(reverse("sales:receipt_pdf", args=[invoice.pk]))

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        filename = f"receipt_{invoice.invoice_number.replace('/', '-')}_thermal.pdf"
        assert filename in response["Content-Disposition"]
        assert response.content.startswith(b"%PDF")

    def test_receipt_for_missing_invoice(self, client, db):
        """Test that an unknown invoice returns 404."""
        response = client.get(reverse("sales:receipt_pdf", args=[999]))

        assert response.status_code == 404

    def test_print_endpoint_without_printer(self, api_client, invoice, receipts_dir):
        """Test printing when no print command is configured."""
        response = api_client.post(reverse("sales:invoice_print", args=[invoice.pk]))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["printed"] is False
        assert os.path.exists(data["path"])

    def test_print_endpoint_missing_invoice(self, api_client, db, receipts_dir):
        """Test printing an unknown invoice returns 404."""
        response = api_client.post(reverse("sales:invoice_print", args=[999]))

        assert response.status_code == 404


@pytest.mark.django_db
class TestReceiptService:
    """Test saving and printing receipts."""

    def test_save_receipt(self, invoice, receipts_dir):
        """Test that the PDF is written under the receipts directory."""
        file_path = ReceiptService.save_receipt(invoice)

        assert file_path.startswith(str(receipts_dir))
        with open(file_path, "rb") as f:
            assert f.read().startswith(b"%PDF")

    def test_print_receipt_runs_command_and_cleans_up(self, invoice, receipts_dir, settings):
        """Test that the print command gets the PDF path and the file is removed."""
        settings.RECEIPT_PRINT_COMMAND = ["lp", "-d", "thermal"]

        with patch("apps.sales.receipt_service.subprocess.run") as mock_run:
            result = ReceiptService.print_receipt(invoice)

        assert result == {"success": True, "printed": True, "path": None}
        command = mock_run.call_args[0][0]
        assert command[:3] == ["lp", "-d", "thermal"]
        assert command[3].endswith(".pdf")
        assert not os.path.exists(command[3])

    def test_print_failure_raises_storage_error(self, invoice, receipts_dir):
        """Test that a failing printer is reported and the file removed."""
        with patch(
            "apps.sales.receipt_service.subprocess.run", side_effect=OSError("no such printer")
        ) as mock_run:
            with pytest.raises(StorageError):
                ReceiptService.print_receipt(invoice, command=["lp"])

        assert not os.path.exists(mock_run.call_args[0][0][-1])
