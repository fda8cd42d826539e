"""
Financial reconciliation for invoices.

Derives paid amount, balance due and financial status from a total and a
list of payments. The derivation is total over all inputs: malformed
amounts count as zero instead of raising, so dashboards and documents never
fail on dirty data.

paid_at is a one-way ratchet. It is stamped the first time an invoice
reconciles as paid and is never cleared, even if a payment is later
removed. It records "was paid at some point", not "is currently paid".
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from invoicing.models import FinancialSnapshot, FinancialStatus, Invoice, ReconciledFinancials
from invoicing.money import MINOR_UNIT_FACTOR, sum_minor_units, to_major_units, to_minor_units
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


def _payment_amount(payment: Any) -> Any:
    """Read amount from a Payment model or a plain mapping."""
    if isinstance(payment, Mapping):
        return payment.get("amount")
    return getattr(payment, "amount", None)


def _classify(total_minor: int, paid_minor: int, balance_minor: int) -> FinancialStatus:
    # A zero total with nothing paid is "due", never "paid".
    if total_minor > 0 and balance_minor == 0:
        return FinancialStatus.PAID
    if paid_minor > 0:
        return FinancialStatus.PARTIAL
    return FinancialStatus.DUE


def compute_financials(
    total: Any,
    payments: Iterable[Any] | None,
    factor: int = MINOR_UNIT_FACTOR,
) -> FinancialSnapshot:
    """
    Compute the financial snapshot for a total and its payments.

    Args:
        total: Invoice total in major units (invalid values count as 0)
        payments: Payment models or mappings carrying an "amount"
        factor: Minor units per major unit

    Returns:
        FinancialSnapshot. Overpayment clamps balance_due to 0.
    """
    total_minor = to_minor_units(total, factor)
    paid_minor = sum_minor_units((_payment_amount(p) for p in payments or ()), factor)
    balance_minor = max(0, total_minor - paid_minor)

    return FinancialSnapshot(
        paid_amount=to_major_units(paid_minor, factor),
        balance_due=to_major_units(balance_minor, factor),
        financial_status=_classify(total_minor, paid_minor, balance_minor),
    )


def overpaid_amount(
    total: Any,
    payments: Iterable[Any] | None,
    factor: int = MINOR_UNIT_FACTOR,
) -> Decimal:
    """How much was paid beyond the total. Zero when not overpaid."""
    total_minor = max(0, to_minor_units(total, factor))
    paid_minor = sum_minor_units((_payment_amount(p) for p in payments or ()), factor)
    return to_major_units(max(0, paid_minor - total_minor), factor)


def reconcile_financials(
    invoice: Invoice,
    now: datetime | None = None,
    factor: int = MINOR_UNIT_FACTOR,
) -> ReconciledFinancials:
    """
    Compute financials and the resulting paid_at without touching the invoice.

    Args:
        invoice: Invoice to reconcile
        now: Timestamp to stamp if the invoice becomes paid (defaults to now)
        factor: Minor units per major unit

    Returns:
        ReconciledFinancials with the snapshot and the paid_at to persist
    """
    snapshot = compute_financials(invoice.total, invoice.payments, factor)

    paid_at = invoice.paid_at
    if snapshot.financial_status == FinancialStatus.PAID and paid_at is None:
        paid_at = now or now_utc()

    return ReconciledFinancials(snapshot=snapshot, paid_at=paid_at)


def apply_financials(
    invoice: Invoice,
    now: datetime | None = None,
    factor: int = MINOR_UNIT_FACTOR,
) -> FinancialSnapshot:
    """
    Recompute financials and write them onto the invoice in place.

    Sets paid_at only if the invoice is now paid and paid_at is unset.
    Never raises.

    Returns:
        The computed FinancialSnapshot
    """
    result = reconcile_financials(invoice, now=now, factor=factor)
    snapshot = result.snapshot

    invoice.paid_amount = snapshot.paid_amount
    invoice.balance_due = snapshot.balance_due
    invoice.financial_status = snapshot.financial_status

    if result.paid_at != invoice.paid_at:
        logger.info("Invoice %s reconciled as paid at %s", invoice.id, result.paid_at.isoformat())
        invoice.paid_at = result.paid_at

    return snapshot
