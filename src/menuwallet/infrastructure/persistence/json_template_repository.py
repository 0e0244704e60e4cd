"""JSON-file-backed implementation of TemplateRepository.

Templates and their analytics snapshot live in two separate files; the
analytics file is written by the backend and only read here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from menuwallet.domain.exceptions import DataSourceError
from menuwallet.domain.model.template import (
    CustomizationTemplate,
    SelectionMode,
    TemplateOption,
    TemplatePerformance,
)
from menuwallet.domain.model.value_objects import DEFAULT_CURRENCY
from menuwallet.domain.repository.template_repository import TemplateRepository
from menuwallet.infrastructure.persistence.json_file import (
    MALFORMED_ROW_ERRORS,
    datetime_from,
    datetime_to,
    ensure_file,
    money_from,
    money_to,
    read_rows,
    write_rows,
)


class JsonTemplateRepository(TemplateRepository):

    def __init__(self, file_path: Path, performance_path: Path) -> None:
        self._file_path = file_path
        self._performance_path = performance_path
        ensure_file(self._file_path)
        ensure_file(self._performance_path)

    # --- TemplateRepository interface -----------------------------------------

    def get_by_id(self, template_id: str) -> CustomizationTemplate | None:
        return self._load().get(template_id)

    def list_all(self) -> list[CustomizationTemplate]:
        return list(self._load().values())

    def save(self, template: CustomizationTemplate) -> None:
        templates = self._load()
        templates[template.id] = template
        self._persist(templates)

    def list_performance(self) -> list[TemplatePerformance]:
        rows = read_rows(self._performance_path)
        try:
            return [
                TemplatePerformance(
                    template_id=str(row["template_id"]),
                    template_name=row["template_name"],
                    usage_count=int(row.get("usage_count", 0)),
                    revenue=money_from(
                        row.get("revenue", "0"), row.get("currency", DEFAULT_CURRENCY)
                    ),
                    performance_score=float(row["performance_score"]),
                    last_used_at=datetime_from(row.get("last_used_at")),
                )
                for row in rows
            ]
        except MALFORMED_ROW_ERRORS as exc:
            raise DataSourceError(
                f"Malformed metrics in {self._performance_path.name}: {exc}"
            ) from exc

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, CustomizationTemplate]:
        rows = read_rows(self._file_path)
        try:
            return {str(row["id"]): self._from_row(row) for row in rows}
        except MALFORMED_ROW_ERRORS as exc:
            raise DataSourceError(
                f"Malformed template in {self._file_path.name}: {exc}"
            ) from exc

    @staticmethod
    def _from_row(row: dict[str, Any]) -> CustomizationTemplate:
        currency = row.get("currency", DEFAULT_CURRENCY)
        return CustomizationTemplate(
            id=str(row["id"]),
            name=row["name"],
            selection_mode=SelectionMode(row.get("selection_mode", "single")),
            options=[
                TemplateOption(
                    name=opt["name"],
                    additional_price=money_from(opt.get("additional_price", "0"), currency),
                    is_default=opt.get("is_default", False),
                )
                for opt in row.get("options", [])
            ],
            is_required=row.get("is_required", False),
            is_active=row.get("is_active", True),
            usage_count=int(row.get("usage_count", 0)),
            description=row.get("description"),
            created_at=datetime_from(row["created_at"]),
        )

    def _persist(self, templates: dict[str, CustomizationTemplate]) -> None:
        write_rows(
            self._file_path,
            [
                {
                    "id": t.id,
                    "name": t.name,
                    "selection_mode": t.selection_mode.value,
                    "is_required": t.is_required,
                    "is_active": t.is_active,
                    "usage_count": t.usage_count,
                    "description": t.description,
                    "created_at": datetime_to(t.created_at),
                    "currency": _currency_of(t),
                    "options": [
                        {
                            "name": opt.name,
                            "additional_price": money_to(opt.additional_price),
                            "is_default": opt.is_default,
                        }
                        for opt in t.options
                    ],
                }
                for t in templates.values()
            ],
        )


def _currency_of(template: CustomizationTemplate) -> str:
    if template.options:
        return template.options[0].additional_price.currency
    return DEFAULT_CURRENCY
