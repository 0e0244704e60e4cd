"""Application service: export wallet history as CSV or JSON text."""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime, timezone

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.model.transaction import WalletTransaction
from menuwallet.domain.model.value_objects import Period
from menuwallet.domain.repository.transaction_repository import TransactionRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import TRANSACTION_FIELDS
from menuwallet.domain.service.sorting import order_records

log = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json")

CSV_HEADER = [
    "Date",
    "Type",
    "Description",
    "Amount",
    "Currency",
    "Balance Before",
    "Balance After",
    "Processing Fee",
    "Status",
    "Reference ID",
]


class ExportTransactionsHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        driver_id: str,
        fmt: str = "csv",
        period: Period = Period.ALL,
        now: datetime | None = None,
    ) -> str:
        """Render the driver's transactions for *period*, newest first.

        Raises ValidationError for an unknown format or when nothing
        falls inside the period.
        """
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(
                f"Unsupported export format '{fmt}' (expected one of {', '.join(EXPORT_FORMATS)})"
            )
        now = now or datetime.now(timezone.utc)

        transactions = self._transaction_repo.list_for_driver(driver_id)
        if not transactions:
            raise ValidationError("No transactions to export")

        criteria = FilterCriteria().with_period(period, now)
        selected = order_records(
            apply_filter(transactions, criteria, TRANSACTION_FIELDS),
            criteria,
            TRANSACTION_FIELDS,
        )
        if not selected:
            raise ValidationError("No transactions found for selected period")

        log.info(
            "Exporting %d transactions for driver %s as %s (%s)",
            len(selected), driver_id, fmt, period.label,
        )
        if fmt == "json":
            return _to_json(selected, now)
        return _to_csv(selected)


# --- Renderers ----------------------------------------------------------------


def _to_csv(transactions: list[WalletTransaction]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for tx in transactions:
        writer.writerow([
            tx.created_at.date().isoformat(),
            tx.transaction_type.display_name,
            tx.description or "",
            f"{tx.amount.amount:.2f}",
            tx.amount.currency,
            _fixed(tx.balance_before),
            _fixed(tx.balance_after),
            f"{tx.processing_fee.amount:.2f}",
            tx.status,
            tx.reference_id or "",
        ])
    return buffer.getvalue()


def _to_json(transactions: list[WalletTransaction], now: datetime) -> str:
    payload = {
        "export_date": now.isoformat(),
        "total_transactions": len(transactions),
        "transactions": [
            {
                "id": tx.id,
                "date": tx.created_at.isoformat(),
                "type": tx.transaction_type.value,
                "type_display": tx.transaction_type.display_name,
                "description": tx.description,
                "amount": f"{tx.amount.amount:.2f}",
                "currency": tx.amount.currency,
                "balance_before": _fixed(tx.balance_before) or None,
                "balance_after": _fixed(tx.balance_after) or None,
                "processing_fee": f"{tx.processing_fee.amount:.2f}",
                "status": tx.status,
                "reference_id": tx.reference_id,
            }
            for tx in transactions
        ],
    }
    return json.dumps(payload, indent=2) + "\n"


def _fixed(money) -> str:
    return "" if money is None else f"{money.amount:.2f}"
