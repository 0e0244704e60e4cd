"""Abstract repository for MenuItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from menuwallet.domain.model.menu_item import MenuItem


class MenuItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> MenuItem | None:
        """Return a menu item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[MenuItem]:
        """Return every menu item in the catalog."""

    @abstractmethod
    def save(self, item: MenuItem) -> None:
        """Persist a new or updated menu item."""
