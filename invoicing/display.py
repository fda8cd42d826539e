"""Display helpers: the status label shown on invoice lists and the outstanding balance."""

from decimal import Decimal

from invoicing.financials import compute_financials
from invoicing.models import FinancialStatus, Invoice, InvoiceStatus
from invoicing.money import MINOR_UNIT_FACTOR


def display_label(invoice: Invoice | None, factor: int = MINOR_UNIT_FACTOR) -> str:
    """
    Single label for an invoice.

    VOID always wins. Otherwise the label is the financial status, so a
    lifecycle-paid invoice that is still short reads PARTIAL.
    """
    if invoice is None:
        return "—"

    if invoice.status == InvoiceStatus.VOID:
        return "VOID"

    snapshot = compute_financials(invoice.total, invoice.payments, factor)
    return snapshot.financial_status.value.upper()


def outstanding_balance(invoice: Invoice, factor: int = MINOR_UNIT_FACTOR) -> Decimal:
    """
    Money still owed on an invoice the customer has received.

    Zero unless the invoice was sent, is neither paid nor void, and is
    financially due or partial.
    """
    zero = Decimal(0)

    if invoice.status in (InvoiceStatus.VOID, InvoiceStatus.PAID):
        return zero
    if invoice.sent_at is None:
        return zero

    snapshot = compute_financials(invoice.total, invoice.payments, factor)
    if snapshot.financial_status == FinancialStatus.PAID:
        return zero
    return snapshot.balance_due
