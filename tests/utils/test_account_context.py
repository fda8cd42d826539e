"""Tests for utils/account_context.py - tenant propagation via contextvars."""

from uuid import uuid4

import pytest

from utils.account_context import (
    get_current_account_id,
    set_current_account_id,
    clear_current_account_id,
    account_context,
)


class TestGetCurrentAccountId:

    def test_raises_without_set(self):
        with pytest.raises(RuntimeError, match="No account context"):
            get_current_account_id()

    def test_set_then_get(self):
        account_id = uuid4()
        set_current_account_id(account_id)
        assert get_current_account_id() == account_id
        clear_current_account_id()


class TestAccountContextManager:

    def test_sets_and_clears(self):
        account_id = uuid4()

        with account_context(account_id):
            assert get_current_account_id() == account_id

        with pytest.raises(RuntimeError):
            get_current_account_id()

    def test_nested_restores_outer(self):
        outer, inner = uuid4(), uuid4()

        with account_context(outer):
            with account_context(inner):
                assert get_current_account_id() == inner
            assert get_current_account_id() == outer

    def test_clears_on_exception(self):
        with pytest.raises(ValueError):
            with account_context(uuid4()):
                raise ValueError("boom")

        with pytest.raises(RuntimeError):
            get_current_account_id()
