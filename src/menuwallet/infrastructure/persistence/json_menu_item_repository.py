"""JSON-file-backed implementation of MenuItemRepository."""

from __future__ import annotations

from pathlib import Path

from menuwallet.domain.exceptions import DataSourceError
from menuwallet.domain.model.menu_item import MenuItem
from menuwallet.domain.model.value_objects import DEFAULT_CURRENCY
from menuwallet.domain.repository.menu_item_repository import MenuItemRepository
from menuwallet.infrastructure.persistence.json_file import (
    MALFORMED_ROW_ERRORS,
    ensure_file,
    money_from,
    money_to,
    read_rows,
    write_rows,
)


class JsonMenuItemRepository(MenuItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- MenuItemRepository interface -----------------------------------------

    def get_by_id(self, item_id: str) -> MenuItem | None:
        return self._load().get(item_id)

    def list_all(self) -> list[MenuItem]:
        return list(self._load().values())

    def save(self, item: MenuItem) -> None:
        items = self._load()
        items[item.id] = item
        self._persist(items)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, MenuItem]:
        rows = read_rows(self._file_path)
        try:
            return {
                str(row["id"]): MenuItem(
                    id=str(row["id"]),
                    name=row["name"],
                    category=row["category"],
                    base_price=money_from(
                        row["base_price"], row.get("currency", DEFAULT_CURRENCY)
                    ),
                    is_available=row.get("is_available", True),
                    description=row.get("description"),
                    template_ids=[str(t) for t in row.get("template_ids", [])],
                )
                for row in rows
            }
        except MALFORMED_ROW_ERRORS as exc:
            raise DataSourceError(
                f"Malformed menu item in {self._file_path.name}: {exc}"
            ) from exc

    def _persist(self, items: dict[str, MenuItem]) -> None:
        write_rows(
            self._file_path,
            [
                {
                    "id": item.id,
                    "name": item.name,
                    "category": item.category,
                    "base_price": money_to(item.base_price),
                    "currency": item.base_price.currency,
                    "is_available": item.is_available,
                    "description": item.description,
                    "template_ids": item.template_ids,
                }
                for item in items.values()
            ],
        )
