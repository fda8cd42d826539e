"""Propagate the current tenant account through the call stack using contextvars."""

from contextlib import contextmanager
from contextvars import ContextVar
from uuid import UUID

_current_account_id: ContextVar[UUID | None] = ContextVar("current_account_id", default=None)


def get_current_account_id() -> UUID:
    """
    Get the current tenant account ID.

    Raises RuntimeError if no account context is set. Invoice operations
    are always tenant-scoped, so a missing context is a bug in the caller.
    """
    account_id = _current_account_id.get()
    if account_id is None:
        raise RuntimeError(
            "No account context set. Invoice operations must run inside "
            "an account-scoped request or job."
        )
    return account_id


def set_current_account_id(account_id: UUID) -> None:
    """Set the current tenant account."""
    _current_account_id.set(account_id)


def clear_current_account_id() -> None:
    """Clear the tenant context. Call in a finally block."""
    _current_account_id.set(None)


@contextmanager
def account_context(account_id: UUID):
    """
    Temporarily scope operations to one tenant account.

    Example:
        with account_context(shop_id):
            invoice = invoice_service.record_payment(invoice_id, payment)
    """
    previous = _current_account_id.get()
    set_current_account_id(account_id)
    try:
        yield
    finally:
        if previous is None:
            clear_current_account_id()
        else:
            set_current_account_id(previous)
