"""JSON-file-backed implementation of TransactionRepository."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from menuwallet.domain.exceptions import DataSourceError
from menuwallet.domain.model.transaction import TransactionType, WalletTransaction
from menuwallet.domain.model.value_objects import DEFAULT_CURRENCY
from menuwallet.domain.repository.transaction_repository import TransactionRepository
from menuwallet.infrastructure.persistence.json_file import (
    MALFORMED_ROW_ERRORS,
    datetime_from,
    ensure_file,
    money_from,
    read_rows,
)


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- TransactionRepository interface --------------------------------------

    def list_for_driver(self, driver_id: str) -> list[WalletTransaction]:
        transactions = [tx for tx in self._load() if tx.driver_id == driver_id]
        transactions.sort(key=lambda tx: tx.created_at, reverse=True)
        return transactions

    def get_by_id(self, transaction_id: str) -> WalletTransaction | None:
        for tx in self._load():
            if tx.id == transaction_id:
                return tx
        return None

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> list[WalletTransaction]:
        rows = read_rows(self._file_path)
        try:
            return [self._from_row(row) for row in rows]
        except MALFORMED_ROW_ERRORS as exc:
            raise DataSourceError(
                f"Malformed transaction record in {self._file_path.name}: {exc}"
            ) from exc

    @staticmethod
    def _from_row(row: dict[str, Any]) -> WalletTransaction:
        currency = row.get("currency", DEFAULT_CURRENCY)
        return WalletTransaction.create(
            id=str(row["id"]),
            driver_id=str(row["driver_id"]),
            transaction_type=TransactionType(row["transaction_type"]),
            amount=money_from(row["amount"], currency),
            created_at=datetime_from(row["created_at"]),
            processed_at=datetime_from(row.get("processed_at")),
            description=row.get("description"),
            reference_id=row.get("reference_id"),
            processing_fee=money_from(row.get("processing_fee") or "0", currency),
            balance_before=money_from(row.get("balance_before"), currency),
            balance_after=money_from(row.get("balance_after"), currency),
        )
