"""Shared JSON-file plumbing for the repositories in this package."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from menuwallet.domain.exceptions import DataSourceError, DomainException
from menuwallet.domain.model.value_objects import Money

# Errors that mean a stored row does not describe a valid record.
MALFORMED_ROW_ERRORS = (
    KeyError,
    TypeError,
    AttributeError,
    ValueError,
    InvalidOperation,
    DomainException,
)


def ensure_file(file_path: Path) -> None:
    if not file_path.exists():
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text("[]", encoding="utf-8")


def read_rows(file_path: Path) -> list[dict[str, Any]]:
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise DataSourceError(f"Could not read {file_path.name}: {exc}") from exc
    if not isinstance(raw, list):
        raise DataSourceError(f"{file_path.name} must contain a JSON list")
    return raw


def write_rows(file_path: Path, rows: list[dict[str, Any]]) -> None:
    file_path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")


# --- Field codecs -------------------------------------------------------------


def money_from(raw: Any, currency: str) -> Money | None:
    if raw is None:
        return None
    return Money(Decimal(str(raw)), currency)


def money_to(money: Money | None) -> str | None:
    return None if money is None else str(money.amount)


def datetime_from(raw: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken to be UTC."""
    if raw is None:
        return None
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def datetime_to(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()
