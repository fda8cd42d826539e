"""Shared test fixtures for the invoicing test suite."""

from uuid import UUID

import pytest

from utils.account_context import account_context, clear_current_account_id


# =============================================================================
# TEST ACCOUNT CONSTANTS
# =============================================================================

# Primary shop account - use for single-tenant tests
TEST_ACCOUNT_ID = UUID("00000000-0000-0000-0000-0000000000a1")

# Secondary shop account - use for tenant isolation tests
TEST_ACCOUNT_B_ID = UUID("00000000-0000-0000-0000-0000000000b2")


# =============================================================================
# ACCOUNT CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_account_context():
    """Ensure clean account context before and after each test."""
    clear_current_account_id()
    yield
    clear_current_account_id()


@pytest.fixture
def test_account_id() -> UUID:
    """The primary test account's ID."""
    return TEST_ACCOUNT_ID


@pytest.fixture
def test_account_b_id() -> UUID:
    """The secondary test account's ID (for isolation tests)."""
    return TEST_ACCOUNT_B_ID


@pytest.fixture
def as_test_account(test_account_id):
    """Run the test inside the primary account's context."""
    with account_context(test_account_id):
        yield test_account_id


@pytest.fixture
def as_test_account_b(test_account_b_id):
    """Run the test inside the secondary account's context."""
    with account_context(test_account_b_id):
        yield test_account_b_id


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def make_invoice(test_account_id):
    """Factory for in-memory invoices, no repository involved."""
    from invoicing.models import Invoice, Payment

    def _make(total=0, payments=(), **kwargs):
        return Invoice(
            account_id=test_account_id,
            total=total,
            payments=[p if isinstance(p, Payment) else Payment(amount=p) for p in payments],
            **kwargs,
        )

    return _make


@pytest.fixture
def event_bus():
    """Fresh EventBus per test."""
    from invoicing.event_bus import EventBus
    return EventBus()


@pytest.fixture
def repository():
    """Fresh in-memory repository per test."""
    from invoicing.repository import InMemoryInvoiceRepository
    return InMemoryInvoiceRepository()


@pytest.fixture
def invoice_service(repository, event_bus):
    """InvoiceService over the in-memory repository."""
    from invoicing.services.invoice_service import InvoiceService
    return InvoiceService(repository, event_bus)
