"""Application service: apply templates to many menu items at once.

Uses the same validate-then-mutate approach as the other multi-aggregate
operations so a bad id never leaves some items updated and others not.
"""

from __future__ import annotations

import logging

from menuwallet.application.dto import BulkApplyResultDTO
from menuwallet.domain.exceptions import EntityNotFoundError, ValidationError
from menuwallet.domain.model.menu_item import MenuItem
from menuwallet.domain.model.template import CustomizationTemplate
from menuwallet.domain.repository.menu_item_repository import MenuItemRepository
from menuwallet.domain.repository.template_repository import TemplateRepository

log = logging.getLogger(__name__)


class BulkApplyTemplatesHandler:

    def __init__(
        self,
        menu_item_repo: MenuItemRepository,
        template_repo: TemplateRepository,
    ) -> None:
        self._menu_item_repo = menu_item_repo
        self._template_repo = template_repo

    def handle(self, menu_item_ids: list[str], template_ids: list[str]) -> BulkApplyResultDTO:
        """Attach *template_ids*, in order, to every item in *menu_item_ids*.

        Steps:
        1. Resolve every id (fail before touching anything).
        2. Attach templates to each item, skipping ones already attached.
        3. Bump each template's usage by the number of new attachments.
        4. Persist changed aggregates.
        """
        if not menu_item_ids:
            raise ValidationError("Select at least one menu item")
        if not template_ids:
            raise ValidationError("Select at least one template")

        # Phase 1: load and validate
        items = [self._load_item(item_id) for item_id in dict.fromkeys(menu_item_ids)]
        templates = [self._load_template(t_id) for t_id in dict.fromkeys(template_ids)]
        inactive = [t.name for t in templates if not t.is_active]
        if inactive:
            raise ValidationError(
                f"Cannot apply inactive template(s): {', '.join(inactive)}"
            )

        # Phase 2: mutate and persist
        ordered_ids = [t.id for t in templates]
        new_uses: dict[str, int] = {t.id: 0 for t in templates}
        items_updated = 0
        for item in items:
            added = item.attach_templates(ordered_ids)
            if not added:
                continue
            items_updated += 1
            for template_id in added:
                new_uses[template_id] += 1
            self._menu_item_repo.save(item)

        for template in templates:
            if new_uses[template.id]:
                template.record_usage(new_uses[template.id])
                self._template_repo.save(template)

        attachments = sum(new_uses.values())
        log.info(
            "Applied %d template(s) to %d menu item(s): %d new attachment(s)",
            len(templates), items_updated, attachments,
        )
        return BulkApplyResultDTO(
            items_updated=items_updated,
            templates_applied=len(templates),
            attachments_created=attachments,
        )

    # --- Internal helpers -----------------------------------------------------

    def _load_item(self, item_id: str) -> MenuItem:
        item = self._menu_item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Menu item with ID '{item_id}' not found")
        return item

    def _load_template(self, template_id: str) -> CustomizationTemplate:
        template = self._template_repo.get_by_id(template_id)
        if template is None:
            raise EntityNotFoundError(f"Template with ID '{template_id}' not found")
        return template
