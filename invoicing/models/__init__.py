"""Invoicing domain models."""

from invoicing.models.payment import Payment, PaymentMethod
from invoicing.models.invoice import (
    Invoice,
    InvoiceStatus,
    FinancialStatus,
    FinancialSnapshot,
    ReconciledFinancials,
)

__all__ = [
    # Payment
    "Payment", "PaymentMethod",
    # Invoice
    "Invoice", "InvoiceStatus", "FinancialStatus",
    "FinancialSnapshot", "ReconciledFinancials",
]
