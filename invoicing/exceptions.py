"""Typed exceptions for invoice lifecycle and payment failures.

Every error is a deterministic client error: the request is rejected
permanently and must not be retried unless the invoice changes.
"""

from typing import Any
from uuid import UUID


class InvoiceError(Exception):
    """Base class for invoice errors. Subclasses set code and status_code."""

    code: str = "INVOICE_ERROR"
    status_code: int = 400

    def details(self) -> dict[str, Any]:
        """Extra structured fields for the error payload."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Structured payload for the HTTP layer to return verbatim."""
        return {
            "code": self.code,
            "statusCode": self.status_code,
            "message": str(self),
            **self.details(),
        }


class InvalidTransitionError(InvoiceError):
    """Requested lifecycle transition is not in the allowed set."""

    code = "INVALID_INVOICE_TRANSITION"

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Invalid invoice transition: {from_status} -> {to_status}")

    def details(self) -> dict[str, Any]:
        return {"from": self.from_status, "to": self.to_status}


class InvoiceLockedError(InvoiceError):
    """Content edit requested on an invoice that has left draft."""

    code = "INVOICE_LOCKED"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invoice is locked once {status}")

    def details(self) -> dict[str, Any]:
        return {"status": self.status}


class InvoicePaidLockedError(InvoiceError):
    """Invoice is financially paid. No further payments or changes."""

    code = "INVOICE_PAID_LOCKED"
    status_code = 409

    def __init__(self):
        super().__init__("Paid invoices cannot be changed.")


class PaymentNotAllowedError(InvoiceError):
    """Payment recorded against an invoice that cannot take money."""

    code = "INVOICE_PAYMENT_NOT_ALLOWED"

    def __init__(self, invoice_id: UUID, status: str):
        self.invoice_id = invoice_id
        self.status = status
        super().__init__(f"Invoice {invoice_id} is {status} and cannot accept payments")

    def details(self) -> dict[str, Any]:
        return {"invoiceId": str(self.invoice_id), "status": self.status}


class InvoiceNotFoundError(InvoiceError):
    """No invoice with that ID in the current account."""

    code = "INVOICE_NOT_FOUND"
    status_code = 404

    def __init__(self, invoice_id: UUID):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} not found")

    def details(self) -> dict[str, Any]:
        return {"invoiceId": str(self.invoice_id)}
