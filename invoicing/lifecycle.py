"""
Invoice lifecycle state machine.

    draft ──> sent ──> paid
      │         │
      └──> void <┘

Re-applying the current status is always allowed. Everything else is
rejected: there is no un-sending (sent -> draft), no refund-to-void
(paid -> void), and nothing leaves void. paid and void are terminal.

Editability is a separate gate: only draft invoices may have their content
(line items, total, notes) changed. Payments and status changes are not
affected by the content lock.

Each gate comes in two forms. check_* returns a tagged result the caller
can match on; assert_* raises the matching InvoiceError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from invoicing.exceptions import InvalidTransitionError, InvoiceLockedError, InvoicePaidLockedError
from invoicing.models import FinancialStatus, InvoiceStatus

ALLOWED_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.SENT, InvoiceStatus.VOID}),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.PAID, InvoiceStatus.VOID}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.VOID: frozenset(),
}


@dataclass(frozen=True)
class TransitionAllowed:
    """Transition may proceed."""

    from_status: InvoiceStatus
    to_status: InvoiceStatus

    @property
    def is_noop(self) -> bool:
        return self.from_status == self.to_status


@dataclass(frozen=True)
class InvalidTransition:
    """Transition is not in the allowed table."""

    from_status: str
    to_status: str

    def to_error(self) -> InvalidTransitionError:
        return InvalidTransitionError(self.from_status, self.to_status)


@dataclass(frozen=True)
class EditAllowed:
    """Invoice content may be edited."""

    status: InvoiceStatus


@dataclass(frozen=True)
class InvoiceLocked:
    """Invoice content is locked."""

    status: str

    def to_error(self) -> InvoiceLockedError:
        return InvoiceLockedError(self.status)


TransitionResult = Union[TransitionAllowed, InvalidTransition]
EditResult = Union[EditAllowed, InvoiceLocked]


def _parse(status: InvoiceStatus | str) -> InvoiceStatus | None:
    try:
        return InvoiceStatus(status)
    except ValueError:
        return None


def _raw(status: Enum | str) -> str:
    # str() on a str-mixin enum member gives "FinancialStatus.PAID", not "paid"
    return status.value if isinstance(status, Enum) else str(status)


def allowed_transitions(from_status: InvoiceStatus | str) -> frozenset[InvoiceStatus]:
    """Statuses reachable from from_status (excluding itself). Unknown -> empty."""
    parsed = _parse(from_status)
    if parsed is None:
        return frozenset()
    return ALLOWED_TRANSITIONS[parsed]


def is_terminal(status: InvoiceStatus | str) -> bool:
    """True when no outgoing transitions exist."""
    return not allowed_transitions(status)


def check_transition(from_status: InvoiceStatus | str, to_status: InvoiceStatus | str) -> TransitionResult:
    """
    Validate a lifecycle transition without raising.

    Unknown status values are always invalid, including unknown -> same unknown.
    """
    source = _parse(from_status)
    target = _parse(to_status)

    if source is None or target is None:
        return InvalidTransition(_raw(from_status), _raw(to_status))

    if source == target or target in ALLOWED_TRANSITIONS[source]:
        return TransitionAllowed(source, target)

    return InvalidTransition(source.value, target.value)


def assert_valid_transition(from_status: InvoiceStatus | str, to_status: InvoiceStatus | str) -> None:
    """
    Raise unless from_status -> to_status is legal.

    Raises:
        InvalidTransitionError: carrying from_status/to_status
    """
    result = check_transition(from_status, to_status)
    if isinstance(result, InvalidTransition):
        raise result.to_error()


def check_editable(status: InvoiceStatus | str) -> EditResult:
    """Content may be edited only in draft."""
    parsed = _parse(status)
    if parsed == InvoiceStatus.DRAFT:
        return EditAllowed(parsed)
    return InvoiceLocked(_raw(status))


def assert_editable(status: InvoiceStatus | str) -> None:
    """
    Raise unless the invoice content may be edited.

    Raises:
        InvoiceLockedError: status is anything other than draft
    """
    result = check_editable(status)
    if isinstance(result, InvoiceLocked):
        raise result.to_error()


def assert_not_paid(financial_status: FinancialStatus | str) -> None:
    """
    Raise once an invoice is financially paid.

    Raises:
        InvoicePaidLockedError: financial_status is paid
    """
    if _raw(financial_status) == FinancialStatus.PAID.value:
        raise InvoicePaidLockedError()
