"""Application service: template form use cases (create, reorder options)."""

from __future__ import annotations

from menuwallet.application.dto import TemplateDTO, TemplateOptionSpec
from menuwallet.domain.exceptions import EntityNotFoundError, ValidationError
from menuwallet.domain.model.template import (
    CustomizationTemplate,
    SelectionMode,
    TemplateOption,
)
from menuwallet.domain.model.value_objects import Money
from menuwallet.domain.repository.template_repository import TemplateRepository


class CreateTemplateHandler:

    def __init__(self, template_repo: TemplateRepository) -> None:
        self._template_repo = template_repo

    def handle(
        self,
        name: str,
        selection_mode: str,
        options: list[TemplateOptionSpec],
        is_required: bool = False,
        description: str | None = None,
    ) -> TemplateDTO:
        """Create a template from form input."""
        try:
            mode = SelectionMode(selection_mode)
        except ValueError:
            raise ValidationError(
                f"Selection mode must be 'single' or 'multiple', got '{selection_mode}'"
            )

        existing = self._template_repo.list_all()
        if name and any(t.name.lower() == name.strip().lower() for t in existing):
            raise ValidationError(f"Template '{name.strip()}' already exists")

        # Auto-assign ID based on existing numeric IDs
        next_id = str(max((int(t.id) for t in existing if t.id.isdigit()), default=0) + 1)

        template = CustomizationTemplate.create(
            id=next_id,
            name=name,
            selection_mode=mode,
            options=[
                TemplateOption(
                    name=spec.name.strip(),
                    additional_price=Money.of(spec.additional_price),
                    is_default=spec.is_default,
                )
                for spec in options
            ],
            is_required=is_required,
            description=description,
        )
        self._template_repo.save(template)
        return TemplateDTO.from_domain(template)


class ReorderTemplateOptionsHandler:

    def __init__(self, template_repo: TemplateRepository) -> None:
        self._template_repo = template_repo

    def handle(self, template_id: str, old_index: int, new_index: int) -> TemplateDTO:
        """Move one option, using the drop index reported by the list."""
        template = self._template_repo.get_by_id(template_id)
        if template is None:
            raise EntityNotFoundError(f"Template with ID '{template_id}' not found")

        template.reorder_options(old_index, new_index)
        self._template_repo.save(template)
        return TemplateDTO.from_domain(template)
