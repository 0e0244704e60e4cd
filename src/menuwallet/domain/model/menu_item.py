"""MenuItem aggregate.

Menu items belong to a vendor's catalog. Apart from the usual catalog
fields they remember which customization templates are attached to
them, in the order the vendor applied them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.value_objects import Money


@dataclass
class MenuItem:

    id: str
    name: str
    category: str
    base_price: Money
    is_available: bool = True
    description: str | None = None
    template_ids: list[str] = field(default_factory=list)

    @staticmethod
    def create(
        id: str,
        name: str,
        category: str,
        base_price: Money,
        is_available: bool = True,
        description: str | None = None,
    ) -> MenuItem:
        """Create a new menu item, enforcing catalog rules."""
        if not name or not name.strip():
            raise ValidationError("Menu item name is required")
        if not category or not category.strip():
            raise ValidationError("Menu item category is required")
        if not base_price.is_positive:
            raise ValidationError("Menu item price must be greater than zero")
        return MenuItem(
            id=id,
            name=name.strip(),
            category=category.strip(),
            base_price=base_price,
            is_available=is_available,
            description=description,
        )

    def attach_templates(self, template_ids: list[str]) -> list[str]:
        """Attach templates in the given order, skipping ones already attached.

        Returns the ids that were newly attached.
        """
        added: list[str] = []
        for template_id in template_ids:
            if template_id in self.template_ids or template_id in added:
                continue
            added.append(template_id)
        self.template_ids.extend(added)
        return added
