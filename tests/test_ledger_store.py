"""
Tests for the Ledger Store and its key-value backends.

Uses the in-memory backend except where persistence to disk is the point.
"""

import json
from decimal import Decimal

import pytest

from balance_book.models.ledger import InvoiceStatus
from balance_book.services.storage import (
    ChangeAction,
    Collection,
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    LedgerStore,
    NotFoundError,
    StorageError,
)
from balance_book.services.storage.demo import (
    DEMO_ACCOUNTS,
    DEMO_INVENTORY,
    DEMO_INVOICES,
    DEMO_TRANSACTIONS,
)

from conftest import make_account, make_invoice, make_product, make_transaction


class TestDemoFallback:
    """Tests for collections that were never saved."""

    def test_empty_backend_reads_demo_data(self, ledger):
        """Test absent keys yield the demo dataset."""
        assert ledger.get_transactions() == DEMO_TRANSACTIONS
        assert ledger.get_invoices() == DEMO_INVOICES
        assert ledger.get_accounts() == DEMO_ACCOUNTS
        assert ledger.get_products() == DEMO_INVENTORY

    def test_demo_invoice_total_includes_tax(self):
        """Test the demo invoice total matches its line items."""
        invoice = DEMO_INVOICES[0]
        assert invoice.items[0].line_total == Decimal("5400")
        assert invoice.total_amount == Decimal("5400.00")

    def test_saved_empty_list_is_not_demo(self, backend, ledger):
        """Test an explicitly emptied collection stays empty."""
        ledger.replace_all(Collection.INVENTORY, [])
        assert ledger.get_products() == ()
        assert LedgerStore(backend).get_products() == ()

    def test_reset_to_demo(self, backend, ledger):
        """Test reset forgets stored data and restores the demo set."""
        ledger.add_transaction(make_transaction("t-new"))
        ledger.reset_to_demo()
        assert ledger.get_transactions() == DEMO_TRANSACTIONS
        assert backend.get(Collection.TRANSACTIONS.storage_key) is None


class TestRecordOperations:
    """Tests for add, update and delete."""

    def test_add_transaction_prepends(self, ledger):
        """Test new transactions go to the front."""
        ledger.add_transaction(make_transaction("t-new"))
        transactions = ledger.get_transactions()
        assert transactions[0].id == "t-new"
        assert len(transactions) == len(DEMO_TRANSACTIONS) + 1

    def test_add_invoice_prepends(self, ledger):
        """Test new invoices go to the front."""
        ledger.add_invoice(make_invoice("i-new"))
        assert ledger.get_invoices()[0].id == "i-new"

    def test_add_account_and_product_append(self, ledger):
        """Test new accounts and products go to the end."""
        ledger.add_account(make_account("a-new", "10", "GBP"))
        ledger.add_product(make_product("p-new", 5))
        assert ledger.get_accounts()[-1].id == "a-new"
        assert ledger.get_products()[-1].id == "p-new"

    def test_update_invoice(self, ledger):
        """Test an invoice can be marked paid."""
        invoice = ledger.find_invoice("inv_001")
        ledger.update_invoice(invoice.model_copy(update={"status": InvoiceStatus.PAID}))
        assert ledger.find_invoice("inv_001").status == InvoiceStatus.PAID

    def test_update_missing_invoice(self, ledger):
        """Test updating an unknown invoice raises."""
        with pytest.raises(NotFoundError):
            ledger.update_invoice(make_invoice("nope"))

    def test_delete(self, ledger):
        """Test deleting records from each collection."""
        ledger.delete_transaction("1")
        ledger.delete_invoice("inv_002")
        ledger.delete_account("ba2")
        ledger.delete_product("p3")
        assert "1" not in {t.id for t in ledger.get_transactions()}
        assert ledger.find_invoice("inv_002") is None
        assert [a.id for a in ledger.get_accounts()] == ["ba1"]
        assert [p.id for p in ledger.get_products()] == ["p1", "p2"]

    def test_delete_missing_raises(self, ledger):
        """Test deleting an unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            ledger.delete_transaction("does-not-exist")

    def test_not_found_is_storage_error(self):
        """Test the exception hierarchy."""
        assert issubclass(NotFoundError, StorageError)

    def test_update_stock(self, ledger):
        """Test stock adjustments."""
        updated = ledger.update_stock("p1", 5)
        assert updated.stock == 50
        assert ledger.get_products()[0].stock == 50

    def test_update_stock_clamps_at_zero(self, ledger):
        """Test stock never goes negative."""
        updated = ledger.update_stock("p2", -100)
        assert updated.stock == 0

    def test_snapshots_are_immutable(self, ledger):
        """Test snapshots are tuples of frozen records."""
        products = ledger.get_products()
        assert isinstance(products, tuple)
        with pytest.raises(Exception):
            products[0].stock = 1


class TestReplaceAll:
    """Tests for bulk replacement."""

    def test_accepts_dicts_with_wire_names(self, ledger):
        """Test records can be given as camelCase dicts."""
        ledger.replace_all("transactions", [{
            "id": "t1",
            "date": "2024-02-01",
            "description": "Imported",
            "amount": "12.50",
            "type": "Expense",
            "category": "Tools",
            "status": "Pending",
            "receiptUrl": None,
        }])
        [transaction] = ledger.get_transactions()
        assert transaction.amount == Decimal("12.50")
        assert transaction.entry_date.isoformat() == "2024-02-01"

    def test_unknown_collection(self, ledger):
        """Test an unknown collection name raises StorageError."""
        with pytest.raises(StorageError):
            ledger.replace_all("customers", [])

    def test_invalid_records(self, ledger):
        """Test records that fail validation raise StorageError."""
        with pytest.raises(StorageError):
            ledger.replace_all(Collection.ACCOUNTS, [{"id": "x", "bankName": "B", "balance": "-1", "currency": "USD"}])


class TestListeners:
    """Tests for change listeners."""

    def test_listener_receives_changes(self, ledger):
        """Test every change is reported after it is written."""
        changes = []
        ledger.subscribe(changes.append)

        ledger.add_product(make_product("p9", 3))
        ledger.update_stock("p9", 1)
        ledger.delete_product("p9")

        assert [(c.collection, c.action, c.record_id) for c in changes] == [
            (Collection.INVENTORY, ChangeAction.ADDED, "p9"),
            (Collection.INVENTORY, ChangeAction.UPDATED, "p9"),
            (Collection.INVENTORY, ChangeAction.DELETED, "p9"),
        ]

    def test_listener_sees_written_state(self, backend, ledger):
        """Test the backend is updated before listeners run."""
        seen = []
        ledger.subscribe(lambda change: seen.append(backend.get(change.collection.storage_key)))
        ledger.add_account(make_account("a9", "1", "USD"))
        assert "a9" in seen[0]

    def test_reset_emits_per_collection(self, ledger):
        """Test reset reports each collection."""
        changes = []
        ledger.subscribe(changes.append)
        ledger.reset_to_demo()
        assert {c.collection for c in changes} == set(Collection)
        assert all(c.action == ChangeAction.RESET for c in changes)

    def test_unsubscribe(self, ledger):
        """Test an unsubscribed listener is not called."""
        changes = []
        unsubscribe = ledger.subscribe(changes.append)
        unsubscribe()
        ledger.add_transaction(make_transaction("t1"))
        assert changes == []


class TestPersistence:
    """Tests for stored data."""

    def test_stored_under_fixed_keys_with_wire_names(self, backend, ledger):
        """Test collections are JSON arrays under bb_* keys."""
        ledger.add_transaction(make_transaction("t1"))
        data = json.loads(backend.get("bb_transactions"))
        assert data[0]["id"] == "t1"
        assert data[0]["date"] == "2024-01-01"
        assert "receiptUrl" in data[0]

    def test_corrupt_data_raises(self):
        """Test unreadable stored data raises StorageError."""
        ledger = LedgerStore(InMemoryKeyValueBackend({"bb_invoices": "{not json"}))
        with pytest.raises(StorageError):
            ledger.get_invoices()

    def test_json_file_round_trip(self, tmp_path):
        """Test data survives a restart with the JSON file backend."""
        path = tmp_path / "state" / "ledger.json"
        ledger = LedgerStore(JsonFileKeyValueBackend(path))
        ledger.add_product(make_product("p9", 3))
        ledger.update_stock("p9", -1)

        reopened = LedgerStore(JsonFileKeyValueBackend(path))
        assert reopened.get_products()[-1].id == "p9"
        assert reopened.get_products()[-1].stock == 2

    def test_json_file_missing_is_empty(self, tmp_path):
        """Test a missing file behaves like an empty store."""
        backend = JsonFileKeyValueBackend(tmp_path / "none.json")
        assert backend.get("bb_theme") is None
        backend.delete("bb_theme")
        assert not backend.path.exists()

    def test_json_file_not_an_object(self, tmp_path):
        """Test a file holding something other than an object raises."""
        path = tmp_path / "bad.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileKeyValueBackend(path).get("bb_theme")

    def test_json_file_invalid_json(self, tmp_path):
        """Test a truncated file raises StorageError."""
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileKeyValueBackend(path).get("bb_theme")
