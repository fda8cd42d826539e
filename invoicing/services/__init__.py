"""Invoicing services."""

from invoicing.services.invoice_service import InvoiceService

__all__ = ["InvoiceService"]
