"""Invoice financial and lifecycle engine."""

from invoicing.money import coerce_amount, to_minor_units, to_major_units, sum_minor_units
from invoicing.financials import (
    compute_financials,
    reconcile_financials,
    apply_financials,
    overpaid_amount,
)
from invoicing.lifecycle import (
    check_transition,
    check_editable,
    assert_valid_transition,
    assert_editable,
    assert_not_paid,
    allowed_transitions,
    is_terminal,
)
from invoicing.exceptions import (
    InvoiceError,
    InvalidTransitionError,
    InvoiceLockedError,
    InvoicePaidLockedError,
    InvoiceNotFoundError,
    PaymentNotAllowedError,
)
