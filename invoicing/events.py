"""
Domain events for invoicing.

Immutable event objects published by InvoiceService after a change has
been saved. Events carry the full invoice so handlers never re-fetch state
that may not have been persisted yet.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class InvoicingEvent:
    """Base class for all invoicing events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


@dataclass(frozen=True)
class InvoiceEvent(InvoicingEvent):
    """Events related to invoice lifecycle and payments."""
    invoice: Any = None  # Invoice


@dataclass(frozen=True)
class InvoiceSent(InvoiceEvent):
    """Invoice moved draft -> sent."""

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceSent":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoicePaid(InvoiceEvent):
    """Invoice moved sent -> paid."""

    @classmethod
    def create(cls, invoice: Any) -> "InvoicePaid":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceVoided(InvoiceEvent):
    """Invoice was voided."""

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceVoided":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class PaymentRecorded(InvoiceEvent):
    """A payment was appended and financials reconciled."""
    payment: Any = None  # Payment

    @classmethod
    def create(cls, invoice: Any, payment: Any) -> "PaymentRecorded":
        return cls(invoice=invoice, payment=payment)


@dataclass(frozen=True)
class InvoiceOverpaid(InvoiceEvent):
    """Payments exceed the invoice total. Classification is still paid."""
    overpaid_amount: Decimal = Decimal("0")

    @classmethod
    def create(cls, invoice: Any, overpaid_amount: Decimal) -> "InvoiceOverpaid":
        return cls(invoice=invoice, overpaid_amount=overpaid_amount)
