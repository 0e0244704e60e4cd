"""Application service: vendor menu item list (query)."""

from __future__ import annotations

from menuwallet.application.dto import MenuItemDTO
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.repository.menu_item_repository import MenuItemRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import MENU_ITEM_FIELDS
from menuwallet.domain.service.sorting import order_records


class ListMenuItemsHandler:

    def __init__(self, menu_item_repo: MenuItemRepository) -> None:
        self._menu_item_repo = menu_item_repo

    def handle(self, criteria: FilterCriteria | None = None) -> list[MenuItemDTO]:
        criteria = criteria or FilterCriteria()
        items = apply_filter(self._menu_item_repo.list_all(), criteria, MENU_ITEM_FIELDS)
        return [MenuItemDTO.from_domain(item) for item in order_records(items, criteria, MENU_ITEM_FIELDS)]
