"""Tests for invoicing/display.py - list labels and outstanding balances."""

from decimal import Decimal

import pytest

from invoicing.display import display_label, outstanding_balance
from invoicing.models import InvoiceStatus
from utils.timezone import now_utc


class TestDisplayLabel:
    """Tests for display_label()."""

    def test_none(self):
        assert display_label(None) == "—"

    def test_void_wins(self, make_invoice):
        invoice = make_invoice(total=100, payments=[100], status=InvoiceStatus.VOID)
        assert display_label(invoice) == "VOID"

    @pytest.mark.parametrize("payments, expected", [
        ([], "DUE"),
        ([25], "PARTIAL"),
        ([60, 40], "PAID"),
        ([150], "PAID"),
    ])
    def test_financial_labels(self, make_invoice, payments, expected):
        invoice = make_invoice(total=100, payments=payments, status=InvoiceStatus.SENT)
        assert display_label(invoice) == expected

    def test_short_paid_lifecycle_reads_partial(self, make_invoice):
        """Marked paid by hand with 40 of 100 received: the money decides."""
        invoice = make_invoice(total=100, payments=[40], status=InvoiceStatus.PAID)
        assert display_label(invoice) == "PARTIAL"

    def test_paid_lifecycle_without_payments_reads_due(self, make_invoice):
        invoice = make_invoice(total=100, status=InvoiceStatus.PAID)
        assert display_label(invoice) == "DUE"

    def test_zero_total_reads_due(self, make_invoice):
        assert display_label(make_invoice(total=0)) == "DUE"

    def test_uses_payments_not_stale_fields(self, make_invoice):
        """Stored derived fields may be stale; the label recomputes."""
        invoice = make_invoice(total=100, payments=[100])
        assert invoice.paid_amount == Decimal("0")
        assert display_label(invoice) == "PAID"


class TestOutstandingBalance:
    """Tests for outstanding_balance()."""

    def test_sent_partial(self, make_invoice):
        invoice = make_invoice(total=99.99, payments=[33.33], status=InvoiceStatus.SENT, sent_at=now_utc())
        assert outstanding_balance(invoice) == Decimal("66.66")

    def test_sent_due(self, make_invoice):
        invoice = make_invoice(total=40, status=InvoiceStatus.SENT, sent_at=now_utc())
        assert outstanding_balance(invoice) == Decimal("40.00")

    def test_never_sent(self, make_invoice):
        invoice = make_invoice(total=40)
        assert outstanding_balance(invoice) == 0

    @pytest.mark.parametrize("status", [InvoiceStatus.VOID, InvoiceStatus.PAID])
    def test_closed_invoices(self, make_invoice, status):
        invoice = make_invoice(total=40, status=status, sent_at=now_utc())
        assert outstanding_balance(invoice) == 0

    def test_paid_in_full_while_sent(self, make_invoice):
        invoice = make_invoice(total=40, payments=[40], status=InvoiceStatus.SENT, sent_at=now_utc())
        assert outstanding_balance(invoice) == 0
