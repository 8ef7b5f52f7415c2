"""
Receipt generation service for the point-of-sale counter.

- HTML thermal receipt for browser printing
- 80mm thermal PDF receipt
- Saving receipts to disk and sending them to a thermal printer
"""

import io
import logging
import os
import subprocess
from typing import Optional

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import escape

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch, mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import HRFlowable

from apps.core.exceptions import StorageError

from .models import Invoice

logger = logging.getLogger(__name__)


class ReceiptGenerator:
    """
    Receipt generator for invoices.

    Expects an invoice prepared by ``InvoiceService.get_invoice`` so that the
    customer details and item names are already joined in.
    """

    # Receipt dimensions
    THERMAL_WIDTH = 80 * mm  # 80mm thermal paper
    THERMAL_MARGIN = 5 * mm

    def __init__(self, invoice: Invoice):
        """Initialize receipt generator with invoice data."""
        self.invoice = invoice
        self.currency = settings.CURRENCY_SYMBOL
        self.styles = getSampleStyleSheet()

        # Create custom styles
        self._create_custom_styles()

    def _create_custom_styles(self):
        """Create custom paragraph styles for receipts."""
        # Thermal shop name style
        self.thermal_shop_style = ParagraphStyle(
            "ThermalShop",
            parent=self.styles["Heading1"],
            fontSize=14,
            spaceAfter=4,
            alignment=1,  # Center alignment
            textColor=colors.black,
            fontName="Helvetica-Bold",
        )

        # Thermal body style (smaller)
        self.thermal_body_style = ParagraphStyle(
            "ThermalBody",
            parent=self.styles["Normal"],
            fontSize=8,
            spaceAfter=4,
            alignment=0,  # Left alignment
            textColor=colors.black,
        )

        # Thermal total style
        self.thermal_total_style = ParagraphStyle(
            "ThermalTotal",
            parent=self.styles["Normal"],
            fontSize=10,
            spaceAfter=4,
            alignment=2,  # Right alignment
            textColor=colors.black,
            fontName="Helvetica-Bold",
        )

    def money(self, value) -> str:
        return f"{self.currency}{value:.2f}"

    def generate_pdf_receipt(self) -> bytes:
        """
        Generate an 80mm thermal PDF receipt.

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=(self.THERMAL_WIDTH, 11 * inch),  # Variable height
            rightMargin=self.THERMAL_MARGIN,
            leftMargin=self.THERMAL_MARGIN,
            topMargin=self.THERMAL_MARGIN,
            bottomMargin=self.THERMAL_MARGIN,
            title=f"Invoice {self.invoice.invoice_number}",
        )

        story = []
        story.extend(self._build_shop_header())
        story.extend(self._build_invoice_info())
        story.extend(self._build_items_table())
        story.extend(self._build_totals_section())
        story.extend(self._build_receipt_footer())

        doc.build(story)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def _build_shop_header(self):
        """Build shop branding header."""
        elements = [Paragraph(escape(settings.SHOP_NAME), self.thermal_shop_style)]

        for info in (settings.SHOP_ADDRESS, f"Phone: {settings.SHOP_PHONE}"):
            elements.append(
                Paragraph(f"<para align='center'>{escape(info)}</para>", self.thermal_body_style)
            )

        elements.append(Spacer(1, 8))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.black))
        elements.append(Spacer(1, 8))

        return elements

    def _build_invoice_info(self):
        """Build invoice number, date and bill-to block."""
        elements = []
        details = self.invoice.customer_details

        invoice_info = [
            f"Invoice #: {self.invoice.invoice_number}",
            f"Date: {timezone.localtime(self.invoice.date).strftime('%d/%m/%Y')}",
        ]
        bill_to = [
            f"Name: {details['name'] or ''}",
            f"Mobile: {details['mobile'] or ''}",
            f"Address: {details['address'] or ''}",
        ]

        for info in invoice_info:
            elements.append(Paragraph(escape(info), self.thermal_body_style))
        elements.append(Spacer(1, 4))
        elements.append(Paragraph("<b>Bill To:</b>", self.thermal_body_style))
        for info in bill_to:
            elements.append(Paragraph(escape(info), self.thermal_body_style))

        elements.append(Spacer(1, 8))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.black))
        elements.append(Spacer(1, 8))

        return elements

    def _build_items_table(self):
        """Build items table."""
        elements = []

        data = [["Item", "Qty", "Price", "Amount"]]
        col_widths = [30 * mm, 10 * mm, 15 * mm, 15 * mm]
        font_size = 7

        for item in self.invoice.line_items:
            name = item.product_name or f"#{item.product_id}"
            data.append(
                [
                    name[:20] + ("..." if len(name) > 20 else ""),
                    str(item.quantity),
                    self.money(item.rate),
                    self.money(item.total),
                ]
            )

        table = Table(data, colWidths=col_widths)
        table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (0, -1), "LEFT"),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), font_size + 1),
                    ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
                    ("FONTSIZE", (0, 1), (-1, -1), font_size),
                    ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )

        elements.append(table)
        elements.append(Spacer(1, 8))

        return elements

    def _build_totals_section(self):
        """Build totals section."""
        return [
            HRFlowable(width="100%", thickness=2, color=colors.black),
            Paragraph(
                f"<para align='right'><b>Total: {self.money(self.invoice.total)}</b></para>",
                self.thermal_total_style,
            ),
            Spacer(1, 8),
        ]

    def _build_receipt_footer(self):
        """Build terms and receipt footer."""
        elements = [Paragraph("<b>Terms &amp; Conditions:</b>", self.thermal_body_style)]

        for term in settings.RECEIPT_TERMS:
            elements.append(Paragraph(f"&bull; {escape(term)}", self.thermal_body_style))

        elements.append(HRFlowable(width="100%", thickness=1, color=colors.black))
        elements.append(Spacer(1, 8))

        for message in ("Thank you for your business!", "Visit Again"):
            elements.append(
                Paragraph(f"<para align='center'>{message}</para>", self.thermal_body_style)
            )

        return elements

    def generate_html_receipt(self) -> str:
        """
        Generate HTML thermal receipt for browser printing.

        Returns:
            HTML string
        """
        context = {
            "invoice": self.invoice,
            "customer": self.invoice.customer_details,
            "items": self.invoice.line_items,
            "shop_name": settings.SHOP_NAME,
            "shop_address": settings.SHOP_ADDRESS,
            "shop_phone": settings.SHOP_PHONE,
            "currency": self.currency,
            "terms": settings.RECEIPT_TERMS,
        }

        return render_to_string("sales/receipt_thermal.html", context)


class ReceiptService:
    """
    Service class for receipt operations.

    Provides high-level interface for receipt generation, storage and
    printing.
    """

    @staticmethod
    def generate_receipt(invoice: Invoice, output_format: str = "pdf") -> bytes:
        """
        Generate receipt for an invoice.

        Args:
            invoice: projected Invoice instance
            output_format: 'pdf' or 'html'

        Returns:
            Receipt bytes (PDF) or encoded HTML
        """
        generator = ReceiptGenerator(invoice)

        if output_format == "pdf":
            return generator.generate_pdf_receipt()
        elif output_format == "html":
            return generator.generate_html_receipt().encode("utf-8")
        else:
            raise ValueError(f"Unsupported output format: {output_format}")

    @staticmethod
    def receipt_filename(invoice: Invoice) -> str:
        number = invoice.invoice_number.replace("/", "-")
        return f"receipt_{number}_thermal.pdf"

    @staticmethod
    def save_receipt(invoice: Invoice) -> str:
        """
        Generate and save the PDF receipt under ``RECEIPTS_ROOT``.

        Returns:
            File path of saved receipt
        """
        receipt_bytes = ReceiptService.generate_receipt(invoice, "pdf")

        receipts_dir = str(settings.RECEIPTS_ROOT)
        file_path = os.path.join(receipts_dir, ReceiptService.receipt_filename(invoice))

        try:
            os.makedirs(receipts_dir, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(receipt_bytes)
        except OSError as e:
            logger.error(f"Could not save receipt for invoice {invoice.invoice_number}: {e}")
            raise StorageError(f"Could not save receipt: {e}") from e

        return file_path

    @staticmethod
    def print_receipt(invoice: Invoice, command: Optional[list] = None) -> dict:
        """
        Send the receipt to the thermal printer.

        The PDF is saved, passed to the configured print command (the file
        path is appended as its last argument) and removed afterwards. With no
        command configured the saved file is kept and its path returned.

        Returns:
            {"success": True, "printed": bool, "path": str or None}
        """
        command = list(command if command is not None else settings.RECEIPT_PRINT_COMMAND)
        file_path = ReceiptService.save_receipt(invoice)

        if not command:
            logger.info(f"No print command configured; receipt saved to {file_path}")
            return {"success": True, "printed": False, "path": file_path}

        try:
            subprocess.run(command + [file_path], check=True, capture_output=True, timeout=60)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Printing invoice {invoice.invoice_number} failed: {e}", exc_info=True)
            raise StorageError(f"Printing failed: {e}") from e
        finally:
            if os.path.exists(file_path):
                os.remove(file_path)

        logger.info(f"Sent receipt for invoice {invoice.invoice_number} to printer")
        return {"success": True, "printed": True, "path": None}
