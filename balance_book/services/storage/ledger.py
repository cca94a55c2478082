"""
Ledger Store

Holds the four ledger collections (transactions, invoices, accounts,
inventory) on top of a KeyValueBackend.

GUARANTEES:
- Getters return immutable snapshots (tuples of frozen records)
- Every change is written through to the backend before listeners run
- A collection that was never saved reads as the built-in demo dataset
- Listeners are called synchronously with a LedgerChange after each change

The valuation and alerting core depends only on the getters.
"""

from typing import Any, Callable, Iterable, Optional, Union

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from balance_book.models.ledger import BankAccount, Invoice, Product, Transaction
from balance_book.services.storage import demo
from balance_book.services.storage.interface import (
    ChangeAction,
    Collection,
    KeyValueBackend,
    LedgerChange,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)

LedgerListener = Callable[[LedgerChange], None]

_RECORD_TYPES: dict[Collection, type[BaseModel]] = {
    Collection.TRANSACTIONS: Transaction,
    Collection.INVOICES: Invoice,
    Collection.ACCOUNTS: BankAccount,
    Collection.INVENTORY: Product,
}

_DEMO_DATA: dict[Collection, tuple] = {
    Collection.TRANSACTIONS: demo.DEMO_TRANSACTIONS,
    Collection.INVOICES: demo.DEMO_INVOICES,
    Collection.ACCOUNTS: demo.DEMO_ACCOUNTS,
    Collection.INVENTORY: demo.DEMO_INVENTORY,
}


def _coerce_collection(collection: Union[Collection, str]) -> Collection:
    try:
        return Collection(collection)
    except ValueError:
        raise StorageError(f"Unknown collection: {collection!r}") from None


class LedgerStore:
    """
    Ledger collections with write-through persistence.

    New transactions and invoices go to the front (newest first);
    new accounts and products go to the end.
    """

    def __init__(self, backend: KeyValueBackend):
        self._backend = backend
        self._cache: dict[Collection, tuple] = {}
        self._adapters = {
            collection: TypeAdapter(list[record_type])
            for collection, record_type in _RECORD_TYPES.items()
        }
        self._listeners: list[LedgerListener] = []

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, listener: LedgerListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns a function that unsubscribes it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, change: LedgerChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    # -------------------------------------------------------------------------
    # Load / save
    # -------------------------------------------------------------------------

    def _load(self, collection: Collection) -> tuple:
        if collection in self._cache:
            return self._cache[collection]

        raw = self._backend.get(collection.storage_key)
        if raw is None:
            records = _DEMO_DATA[collection]
        else:
            try:
                records = tuple(self._adapters[collection].validate_json(raw))
            except ValidationError as e:
                raise StorageError(
                    f"Stored {collection.value} could not be read: {e}"
                ) from e

        self._cache[collection] = records
        return records

    def _save(self, collection: Collection, records: Iterable[Any]) -> tuple:
        records = tuple(records)
        payload = self._adapters[collection].dump_json(list(records), by_alias=True)
        self._backend.set(collection.storage_key, payload.decode("utf-8"))
        self._cache[collection] = records
        return records

    def _index_of(self, collection: Collection, record_id: str) -> int:
        for index, record in enumerate(self._load(collection)):
            if record.id == record_id:
                return index
        raise NotFoundError(f"No record {record_id!r} in {collection.value}")

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def get_transactions(self) -> tuple[Transaction, ...]:
        return self._load(Collection.TRANSACTIONS)

    def get_invoices(self) -> tuple[Invoice, ...]:
        return self._load(Collection.INVOICES)

    def get_accounts(self) -> tuple[BankAccount, ...]:
        return self._load(Collection.ACCOUNTS)

    def get_products(self) -> tuple[Product, ...]:
        return self._load(Collection.INVENTORY)

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def replace_all(
        self,
        collection: Union[Collection, str],
        records: Iterable[Any],
    ) -> None:
        """
        Replace a whole collection (import / restore).

        Records may be model instances or dicts in either field naming.

        Raises:
            StorageError: Unknown collection or records that fail validation
        """
        collection = _coerce_collection(collection)
        try:
            validated = self._adapters[collection].validate_python(list(records))
        except ValidationError as e:
            raise StorageError(f"Invalid {collection.value} records: {e}") from e

        saved = self._save(collection, validated)
        logger.info("collection_replaced", collection=collection.value, count=len(saved))
        self._emit(LedgerChange(
            collection=collection,
            action=ChangeAction.REPLACED,
            record_count=len(saved),
        ))

    def reset_to_demo(self) -> None:
        """Revert every collection to the demo dataset and forget stored copies."""
        for collection in Collection:
            self._backend.delete(collection.storage_key)
            self._cache[collection] = _DEMO_DATA[collection]
        logger.info("ledger_reset_to_demo")
        for collection in Collection:
            self._emit(LedgerChange(
                collection=collection,
                action=ChangeAction.RESET,
                record_count=len(_DEMO_DATA[collection]),
            ))

    # -------------------------------------------------------------------------
    # Record operations
    # -------------------------------------------------------------------------

    def _prepend(self, collection: Collection, record: Any) -> None:
        self._save(collection, (record,) + self._load(collection))
        self._emit(LedgerChange(
            collection=collection, action=ChangeAction.ADDED, record_id=record.id,
        ))

    def _append(self, collection: Collection, record: Any) -> None:
        self._save(collection, self._load(collection) + (record,))
        self._emit(LedgerChange(
            collection=collection, action=ChangeAction.ADDED, record_id=record.id,
        ))

    def _replace(self, collection: Collection, record: Any) -> None:
        index = self._index_of(collection, record.id)
        records = list(self._load(collection))
        records[index] = record
        self._save(collection, records)
        self._emit(LedgerChange(
            collection=collection, action=ChangeAction.UPDATED, record_id=record.id,
        ))

    def _delete(self, collection: Collection, record_id: str) -> None:
        index = self._index_of(collection, record_id)
        records = list(self._load(collection))
        del records[index]
        self._save(collection, records)
        self._emit(LedgerChange(
            collection=collection, action=ChangeAction.DELETED, record_id=record_id,
        ))

    def add_transaction(self, transaction: Transaction) -> None:
        self._prepend(Collection.TRANSACTIONS, transaction)

    def delete_transaction(self, transaction_id: str) -> None:
        self._delete(Collection.TRANSACTIONS, transaction_id)

    def add_invoice(self, invoice: Invoice) -> None:
        self._prepend(Collection.INVOICES, invoice)

    def update_invoice(self, invoice: Invoice) -> None:
        """Replace the invoice with the same id (e.g. a status change)."""
        self._replace(Collection.INVOICES, invoice)

    def delete_invoice(self, invoice_id: str) -> None:
        self._delete(Collection.INVOICES, invoice_id)

    def add_account(self, account: BankAccount) -> None:
        self._append(Collection.ACCOUNTS, account)

    def delete_account(self, account_id: str) -> None:
        self._delete(Collection.ACCOUNTS, account_id)

    def add_product(self, product: Product) -> None:
        self._append(Collection.INVENTORY, product)

    def update_stock(self, product_id: str, delta: int) -> Product:
        """
        Adjust a product's stock by delta.

        Stock never goes below zero.
        """
        products = self._load(Collection.INVENTORY)
        current = products[self._index_of(Collection.INVENTORY, product_id)]
        updated = current.model_copy(update={"stock": max(0, current.stock + delta)})
        self._replace(Collection.INVENTORY, updated)
        return updated

    def delete_product(self, product_id: str) -> None:
        self._delete(Collection.INVENTORY, product_id)

    def find_invoice(self, invoice_id: str) -> Optional[Invoice]:
        for invoice in self.get_invoices():
            if invoice.id == invoice_id:
                return invoice
        return None
