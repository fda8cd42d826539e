"""Payment records recorded against an invoice."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from utils.timezone import now_utc, to_utc


class PaymentMethod(str, Enum):
    """How the customer paid."""

    CASH = "cash"
    CARD = "card"
    E_TRANSFER = "e-transfer"
    CHEQUE = "cheque"


class Payment(BaseModel):
    """
    A single payment.

    amount is deliberately untyped: whatever the caller recorded is kept,
    and the money primitive decides what it is worth (non-numeric -> 0).
    """

    amount: Any = None
    method: PaymentMethod | None = None
    reference: str | None = Field(None, max_length=200)
    paid_at: datetime = Field(default_factory=now_utc)

    @field_validator("paid_at")
    @classmethod
    def normalize_paid_at(cls, value: datetime) -> datetime:
        """Payments from other timezones are stored in UTC. Naive times are rejected."""
        return to_utc(value)
