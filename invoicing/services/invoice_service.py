"""
Invoice service for lifecycle transitions and payments.

Composes the lifecycle gates and financial reconciliation over a
repository. Each mutating operation is a read-modify-write, so it runs
under a per-invoice lock: load, gate, mutate, reconcile, save, then publish.
"""

import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from invoicing.config import BillingConfig
from invoicing.display import outstanding_balance
from invoicing.event_bus import EventBus
from invoicing.events import InvoiceOverpaid, InvoicePaid, InvoiceSent, InvoiceVoided, PaymentRecorded
from invoicing.exceptions import InvoiceNotFoundError, PaymentNotAllowedError
from invoicing.financials import apply_financials, compute_financials, overpaid_amount
from invoicing.lifecycle import assert_editable, assert_not_paid, assert_valid_transition
from invoicing.models import FinancialSnapshot, FinancialStatus, Invoice, InvoiceStatus, Payment
from invoicing.repository import InvoiceRepository
from utils.account_context import get_current_account_id
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_TRANSITION_EVENTS = {
    InvoiceStatus.SENT: InvoiceSent,
    InvoiceStatus.PAID: InvoicePaid,
    InvoiceStatus.VOID: InvoiceVoided,
}


class _InvoiceLock:
    # Entries drop out of the weak map once no caller holds or waits on them.
    __slots__ = ("lock", "__weakref__")

    def __init__(self):
        self.lock = threading.Lock()


class InvoiceService:
    """Service for invoice operations, scoped to the current account."""

    def __init__(
        self,
        repository: InvoiceRepository,
        event_bus: EventBus,
        config: BillingConfig | None = None,
    ):
        self.repository = repository
        self.event_bus = event_bus
        self.config = config or BillingConfig()
        self._locks: weakref.WeakValueDictionary[UUID, _InvoiceLock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    @property
    def _factor(self) -> int:
        return self.config.minor_unit_factor

    @contextmanager
    def _locked(self, invoice_id: UUID):
        """Serialize read-modify-write on one invoice."""
        with self._locks_guard:
            entry = self._locks.get(invoice_id)
            if entry is None:
                entry = self._locks[invoice_id] = _InvoiceLock()
        with entry.lock:
            yield

    def _generate_invoice_number(self, account_id: UUID, now: datetime) -> str:
        """
        Generate the next invoice number for an account.

        Format: PREFIX-YYYYMMDD-XXXX where XXXX is a per-day sequence.
        """
        prefix = f"{self.config.invoice_number_prefix}-{now.strftime('%Y%m%d')}-"

        sequence = 0
        for invoice in self.repository.list_for_account(account_id):
            number = invoice.invoice_number or ""
            if not number.startswith(prefix):
                continue
            try:
                sequence = max(sequence, int(number.rsplit("-", 1)[-1]))
            except ValueError:
                continue

        return f"{prefix}{sequence + 1:04d}"

    def create(
        self,
        total: Any,
        invoice_number: str | None = None,
        notes: str | None = None,
    ) -> Invoice:
        """
        Create a draft invoice.

        Args:
            total: Invoice total in major units, already including tax
            invoice_number: Explicit number, generated when omitted
            notes: Optional invoice notes

        Returns:
            Created invoice in DRAFT status with financials reconciled
        """
        account_id = get_current_account_id()
        now = now_utc()

        invoice = Invoice(
            account_id=account_id,
            invoice_number=invoice_number or self._generate_invoice_number(account_id, now),
            total=total,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        apply_financials(invoice, now=now, factor=self._factor)
        self.repository.save(invoice)

        logger.info("Created invoice %s (%s)", invoice.id, invoice.invoice_number)
        return invoice

    def get(self, invoice_id: UUID) -> Invoice | None:
        """Get invoice by ID in the current account."""
        return self.repository.get(get_current_account_id(), invoice_id)

    def require(self, invoice_id: UUID) -> Invoice:
        """
        Get invoice by ID or fail.

        Raises:
            InvoiceNotFoundError: No such invoice in the current account
        """
        invoice = self.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def update_content(
        self,
        invoice_id: UUID,
        total: Any = None,
        notes: str | None = None,
    ) -> Invoice:
        """
        Edit invoice content. Draft invoices only.

        Args:
            invoice_id: Invoice UUID
            total: New total, unchanged when None
            notes: New notes, unchanged when None

        Returns:
            Updated invoice with financials recomputed

        Raises:
            InvoiceNotFoundError: Invoice missing
            InvoiceLockedError: Invoice has left draft
        """
        with self._locked(invoice_id):
            current = self.require(invoice_id)
            assert_editable(current.status)

            if total is not None:
                current.total = total
            if notes is not None:
                current.notes = notes

            now = now_utc()
            apply_financials(current, now=now, factor=self._factor)
            current.updated_at = now
            self.repository.save(current)

        return current

    def transition(self, invoice_id: UUID, to_status: InvoiceStatus | str) -> Invoice:
        """
        Move an invoice to another lifecycle status.

        Same-status requests succeed without changes or events.

        Args:
            invoice_id: Invoice UUID
            to_status: Target status

        Returns:
            Updated invoice

        Raises:
            InvoiceNotFoundError: Invoice missing
            InvalidTransitionError: Transition not allowed from current status
        """
        with self._locked(invoice_id):
            current = self.require(invoice_id)
            assert_valid_transition(current.status, to_status)

            target = InvoiceStatus(to_status)
            if target == current.status:
                logger.debug("Invoice %s already %s", invoice_id, target.value)
                return current

            previous = current.status
            now = now_utc()

            current.status = target
            if target == InvoiceStatus.SENT and current.sent_at is None:
                current.sent_at = now
            elif target == InvoiceStatus.VOID and current.voided_at is None:
                current.voided_at = now
            elif target == InvoiceStatus.PAID:
                apply_financials(current, now=now, factor=self._factor)

            current.updated_at = now
            self.repository.save(current)

        logger.info("Invoice %s: %s -> %s", invoice_id, previous.value, target.value)
        self.event_bus.publish(_TRANSITION_EVENTS[target].create(invoice=current))
        return current

    def send(self, invoice_id: UUID) -> Invoice:
        """Transition to SENT."""
        return self.transition(invoice_id, InvoiceStatus.SENT)

    def void(self, invoice_id: UUID) -> Invoice:
        """Transition to VOID."""
        return self.transition(invoice_id, InvoiceStatus.VOID)

    def mark_paid(self, invoice_id: UUID) -> Invoice:
        """Transition to PAID. Financials are reapplied as part of the move."""
        return self.transition(invoice_id, InvoiceStatus.PAID)

    def record_payment(self, invoice_id: UUID, payment: Payment) -> Invoice:
        """
        Record a payment on an invoice.

        A sent invoice whose balance reaches zero moves to PAID.

        Args:
            invoice_id: Invoice UUID
            payment: Payment to append

        Returns:
            Updated invoice

        Raises:
            InvoiceNotFoundError: Invoice missing
            PaymentNotAllowedError: Invoice is voided
            InvoicePaidLockedError: Invoice is already fully paid
        """
        with self._locked(invoice_id):
            current = self.require(invoice_id)
            now = now_utc()

            if current.status == InvoiceStatus.VOID:
                raise PaymentNotAllowedError(invoice_id, current.status.value)

            before = apply_financials(current, now=now, factor=self._factor)
            assert_not_paid(before.financial_status)

            current.payments = [*current.payments, payment]
            snapshot = apply_financials(current, now=now, factor=self._factor)
            excess = overpaid_amount(current.total, current.payments, self._factor)

            became_paid = (
                snapshot.financial_status == FinancialStatus.PAID
                and current.status == InvoiceStatus.SENT
            )
            if became_paid:
                assert_valid_transition(current.status, InvoiceStatus.PAID)
                current.status = InvoiceStatus.PAID

            current.updated_at = now
            self.repository.save(current)

        logger.info(
            "Recorded payment on invoice %s: paid=%s balance=%s status=%s",
            invoice_id,
            snapshot.paid_amount,
            snapshot.balance_due,
            snapshot.financial_status.value,
        )
        self.event_bus.publish(PaymentRecorded.create(invoice=current, payment=payment))

        if excess > 0:
            logger.warning("Invoice %s overpaid by %s", invoice_id, excess)
            self.event_bus.publish(InvoiceOverpaid.create(invoice=current, overpaid_amount=excess))

        if became_paid:
            self.event_bus.publish(InvoicePaid.create(invoice=current))

        return current

    def snapshot(self, invoice_id: UUID) -> FinancialSnapshot:
        """Current financial snapshot, recomputed from payments. Nothing is saved."""
        current = self.require(invoice_id)
        return compute_financials(current.total, current.payments, self._factor)

    def list_outstanding(self) -> list[Invoice]:
        """
        Sent invoices that still owe money, oldest first.

        Returns:
            Invoices with a positive outstanding balance
        """
        invoices = self.repository.list_for_account(get_current_account_id())
        outstanding = [
            invoice for invoice in invoices
            if outstanding_balance(invoice, self._factor) > Decimal(0)
        ]
        return sorted(outstanding, key=lambda invoice: invoice.sent_at)
