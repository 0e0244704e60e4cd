"""Unit tests for customization templates."""

from datetime import datetime, timezone

import pytest

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.template import (
    OTHER_CATEGORY,
    CustomizationTemplate,
    SelectionMode,
    TemplateOption,
    TemplatePerformance,
    categorize,
)
from menuwallet.domain.model.value_objects import Money


def _options(*names: str) -> list[TemplateOption]:
    return [TemplateOption(name) for name in names]


def _make_template(name: str = "Spice Level", *options: str) -> CustomizationTemplate:
    return CustomizationTemplate.create(
        id="1",
        name=name,
        selection_mode=SelectionMode.SINGLE,
        options=_options(*(options or ("Mild", "Medium", "Hot"))),
    )


class TestTemplateOption:

    def test_default_price_is_zero(self):
        assert TemplateOption("Mild").additional_price.is_zero

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Option name is required"):
            TemplateOption(" ")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="negative price"):
            TemplateOption("Large", Money.of("-1"))


class TestTemplateCreation:

    def test_happy_path(self):
        template = _make_template()
        assert template.usage_count == 0
        assert template.is_active
        assert [o.name for o in template.options] == ["Mild", "Medium", "Hot"]

    def test_requires_name(self):
        with pytest.raises(ValidationError, match="Template name is required"):
            _make_template("")

    def test_requires_an_option(self):
        with pytest.raises(ValidationError, match="at least one option"):
            CustomizationTemplate.create("1", "Size", SelectionMode.SINGLE, [])

    def test_single_mode_allows_one_default(self):
        options = [TemplateOption("Small", is_default=True), TemplateOption("Large", is_default=True)]
        with pytest.raises(ValidationError, match="only one default"):
            CustomizationTemplate.create("1", "Size", SelectionMode.SINGLE, options)

    def test_multiple_mode_allows_many_defaults(self):
        options = [TemplateOption("Egg", is_default=True), TemplateOption("Sambal", is_default=True)]
        template = CustomizationTemplate.create("1", "Extras", SelectionMode.MULTIPLE, options)
        assert len(template.default_options) == 2


class TestCategorize:

    @pytest.mark.parametrize("name, expected", [
        ("Portion Size", "Size Options"),
        ("Extra Toppings", "Add-ons"),
        ("Spice Level", "Spice Level"),
        ("Cooking Preference", "Cooking Style"),
        ("Vegan Swap", "Dietary"),
        ("Packaging", OTHER_CATEGORY),
    ])
    def test_keywords(self, name, expected):
        assert categorize(name) == expected

    def test_first_match_wins(self):
        # "size" comes before "extra" in the keyword list
        assert categorize("Extra Size") == "Size Options"


class TestReorderOptions:

    def test_move_down_uses_drop_slot(self):
        template = _make_template("Spice Level", "A", "B", "C")
        template.reorder_options(0, 2)
        assert [o.name for o in template.options] == ["B", "A", "C"]

    def test_move_up(self):
        template = _make_template("Spice Level", "A", "B", "C")
        template.reorder_options(2, 0)
        assert [o.name for o in template.options] == ["C", "A", "B"]

    def test_drop_at_end(self):
        template = _make_template("Spice Level", "A", "B", "C")
        template.reorder_options(0, 3)
        assert [o.name for o in template.options] == ["B", "C", "A"]

    def test_out_of_range_rejected(self):
        template = _make_template("Spice Level", "A", "B")
        with pytest.raises(ValidationError, match="Cannot move item"):
            template.reorder_options(5, 0)


class TestUsage:

    def test_record_usage(self):
        template = _make_template()
        template.record_usage()
        template.record_usage(3)
        assert template.usage_count == 4

    def test_negative_increment_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _make_template().record_usage(-1)


class TestTemplatePerformance:

    def test_score_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            TemplatePerformance("1", "Size", 3, Money.of("10"), 120.0)

    def test_last_used_is_optional(self):
        metric = TemplatePerformance(
            "1", "Size", 3, Money.of("10"), 55.0,
            last_used_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
        assert metric.last_used_at.year == 2026
