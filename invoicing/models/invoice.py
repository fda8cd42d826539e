"""
Invoice domain models.

Amounts are Decimal major units (dollars). They are only ever summed or
compared after conversion to minor units, see invoicing.money.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from invoicing.models.payment import Payment
from utils.timezone import now_utc


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    VOID = "void"


class FinancialStatus(str, Enum):
    """Payment completeness, derived from total and payments."""

    PAID = "paid"
    PARTIAL = "partial"
    DUE = "due"


class Invoice(BaseModel):
    """
    Invoice record as seen by the engine.

    paid_amount, balance_due and financial_status are projections of total
    and payments. They are overwritten on every reconciliation and should
    never be edited by hand.
    """

    id: UUID = Field(default_factory=uuid4)
    account_id: UUID
    invoice_number: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    total: Any = Decimal("0")
    payments: list[Payment] = Field(default_factory=list)
    paid_amount: Decimal = Decimal("0")
    balance_due: Decimal = Decimal("0")
    financial_status: FinancialStatus = FinancialStatus.DUE
    paid_at: datetime | None = None
    sent_at: datetime | None = None
    voided_at: datetime | None = None
    notes: str | None = Field(None, max_length=2000)
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)

    model_config = {"from_attributes": True, "validate_assignment": True}

    @property
    def is_locked(self) -> bool:
        """Whether content edits are blocked (anything past draft)."""
        return self.status != InvoiceStatus.DRAFT


@dataclass(frozen=True)
class FinancialSnapshot:
    """Derived financial state of an invoice at one point in time."""

    paid_amount: Decimal
    balance_due: Decimal
    financial_status: FinancialStatus

    def to_dict(self) -> dict[str, Any]:
        """Wire shape used by API clients."""
        return {
            "paidAmount": float(self.paid_amount),
            "balanceDue": float(self.balance_due),
            "financialStatus": self.financial_status.value,
        }


@dataclass(frozen=True)
class ReconciledFinancials:
    """Snapshot plus the paid_at the invoice should carry afterwards."""

    snapshot: FinancialSnapshot
    paid_at: datetime | None
