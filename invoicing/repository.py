"""
Invoice storage boundary.

The engine never talks to a database directly. InvoiceService depends on
the InvoiceRepository protocol; the bundled in-memory implementation backs
tests and single-process tools. Every lookup is scoped to a tenant account.
"""

import threading
from typing import Protocol
from uuid import UUID

from invoicing.models import Invoice


class InvoiceRepository(Protocol):
    """Account-scoped invoice persistence."""

    def get(self, account_id: UUID, invoice_id: UUID) -> Invoice | None: ...

    def save(self, invoice: Invoice) -> Invoice: ...

    def list_for_account(self, account_id: UUID) -> list[Invoice]: ...


class InMemoryInvoiceRepository:
    """
    Dict-backed repository.

    Stores deep copies so callers can't mutate persisted state without
    calling save().
    """

    def __init__(self):
        self._invoices: dict[tuple[UUID, UUID], Invoice] = {}
        self._lock = threading.Lock()

    def get(self, account_id: UUID, invoice_id: UUID) -> Invoice | None:
        with self._lock:
            stored = self._invoices.get((account_id, invoice_id))
            return stored.model_copy(deep=True) if stored is not None else None

    def save(self, invoice: Invoice) -> Invoice:
        with self._lock:
            self._invoices[(invoice.account_id, invoice.id)] = invoice.model_copy(deep=True)
        return invoice

    def list_for_account(self, account_id: UUID) -> list[Invoice]:
        with self._lock:
            return [
                invoice.model_copy(deep=True)
                for (owner, _), invoice in self._invoices.items()
                if owner == account_id
            ]
