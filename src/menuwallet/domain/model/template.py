"""CustomizationTemplate aggregate.

A template is a reusable group of options (size, spice level, add-ons)
that a vendor attaches to any number of menu items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.ordering import move_item
from menuwallet.domain.model.value_objects import Money


class SelectionMode(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class TemplateOption:

    name: str
    additional_price: Money = field(default_factory=Money.zero)
    is_default: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Option name is required")
        if self.additional_price.is_negative:
            raise ValidationError(
                f"Option '{self.name}' cannot have a negative price"
            )


# Keyword groups used to bucket templates for the category filter.
# First match wins.
_CATEGORY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("Size Options", ("size", "portion")),
    ("Add-ons", ("add", "extra")),
    ("Spice Level", ("spice", "level")),
    ("Cooking Style", ("cook", "style")),
    ("Dietary", ("diet", "vegan", "halal")),
]

OTHER_CATEGORY = "Other"


def categorize(template_name: str) -> str:
    """Derive a display category from a template's name."""
    name = template_name.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return OTHER_CATEGORY


@dataclass
class CustomizationTemplate:
    """Aggregate root for customization templates.

    Invariants (checked by ``create()``):
    - at least one option
    - single-selection templates have at most one default option
    - ``usage_count`` is never negative
    """

    id: str
    name: str
    selection_mode: SelectionMode
    options: list[TemplateOption]
    is_required: bool = False
    is_active: bool = True
    usage_count: int = 0
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        id: str,
        name: str,
        selection_mode: SelectionMode,
        options: list[TemplateOption],
        is_required: bool = False,
        description: str | None = None,
    ) -> CustomizationTemplate:
        """Create a new template, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Template name is required")
        if not options:
            raise ValidationError("Please add at least one option")

        defaults = [option for option in options if option.is_default]
        if selection_mode is SelectionMode.SINGLE and len(defaults) > 1:
            raise ValidationError(
                "Single-selection templates can have only one default option"
            )

        return CustomizationTemplate(
            id=id,
            name=name.strip(),
            selection_mode=selection_mode,
            options=list(options),
            is_required=is_required,
            description=description,
        )

    @property
    def category(self) -> str:
        return categorize(self.name)

    @property
    def default_options(self) -> list[TemplateOption]:
        return [option for option in self.options if option.is_default]

    def reorder_options(self, old_index: int, new_index: int) -> None:
        move_item(self.options, old_index, new_index)

    def record_usage(self, times: int = 1) -> None:
        """Count *times* new menu-item attachments."""
        if times < 0:
            raise ValidationError("Usage increment cannot be negative")
        self.usage_count += times


@dataclass(frozen=True)
class TemplatePerformance:
    """Analytics snapshot for one template.

    One typed record per template instead of a loose metrics mapping.
    """

    template_id: str
    template_name: str
    usage_count: int
    revenue: Money
    performance_score: float
    last_used_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.performance_score <= 100:
            raise ValidationError(
                f"Performance score must be between 0 and 100, got {self.performance_score}"
            )
        if self.usage_count < 0:
            raise ValidationError("Usage count cannot be negative")
