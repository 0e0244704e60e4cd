"""Integration tests for the template list, ranking and form use cases.

Uses in-memory fake repositories — no file I/O.
"""

from datetime import datetime, timezone

import pytest

from menuwallet.application.dto import TemplateOptionSpec
from menuwallet.application.list_menu_items import ListMenuItemsHandler
from menuwallet.application.list_templates import ListTemplatesHandler
from menuwallet.application.manage_templates import (
    CreateTemplateHandler,
    ReorderTemplateOptionsHandler,
)
from menuwallet.application.rank_templates import RankTemplatesHandler
from menuwallet.domain.exceptions import EntityNotFoundError, ValidationError
from menuwallet.domain.model.criteria import FilterCriteria, SortKey
from menuwallet.domain.model.menu_item import MenuItem
from menuwallet.domain.model.template import (
    CustomizationTemplate,
    SelectionMode,
    TemplateOption,
    TemplatePerformance,
)
from menuwallet.domain.model.value_objects import Money
from tests.fakes import FakeMenuItemRepository, FakeTemplateRepository


def _make_template(id: str, name: str, usage: int = 0, **extra) -> CustomizationTemplate:
    return CustomizationTemplate(
        id=id,
        name=name,
        selection_mode=SelectionMode.SINGLE,
        options=[TemplateOption("Small"), TemplateOption("Large", Money.of("2"))],
        usage_count=usage,
        **extra,
    )


def _metric(id: str, name: str, score: float, revenue: str, usage: int) -> TemplatePerformance:
    return TemplatePerformance(id, name, usage, Money.of(revenue), score)


def _template_repo() -> FakeTemplateRepository:
    return FakeTemplateRepository(
        templates=[
            _make_template("1", "Portion Size", 12),
            _make_template("2", "Spice Level", 30, is_required=True),
            _make_template("3", "Extra Toppings", 12),
            _make_template("4", "Old Sauces", 50, is_active=False),
        ],
        performance=[
            _metric("1", "Portion Size", 64.0, "310.00", 12),
            _metric("2", "Spice Level", 91.5, "120.00", 30),
            _metric("3", "Extra Toppings", 78.0, "540.00", 12),
        ],
    )


class TestListTemplates:

    def test_default_order_is_usage_then_name(self):
        names = [t.name for t in ListTemplatesHandler(_template_repo()).handle()]
        assert names == ["Old Sauces", "Spice Level", "Extra Toppings", "Portion Size"]

    def test_flags(self):
        criteria = FilterCriteria(flags=frozenset({"active_only", "required_only"}))
        names = [t.name for t in ListTemplatesHandler(_template_repo()).handle(criteria)]
        assert names == ["Spice Level"]

    def test_category_filter(self):
        criteria = FilterCriteria(category="Add-ons")
        names = [t.name for t in ListTemplatesHandler(_template_repo()).handle(criteria)]
        assert names == ["Extra Toppings"]

    def test_search(self):
        criteria = FilterCriteria(query="spice")
        dtos = ListTemplatesHandler(_template_repo()).handle(criteria)
        assert [t.id for t in dtos] == ["2"]
        assert dtos[0].options[1].additional_price == "RM 2.00"


class TestRankTemplates:

    def test_best_score_first(self):
        ranked = RankTemplatesHandler(_template_repo()).handle()
        assert [m.template_id for m in ranked] == ["2", "3", "1"]
        assert ranked[0].performance_score == "92% score"
        assert ranked[0].last_used_at == "never"

    def test_sort_by_revenue(self):
        criteria = FilterCriteria(sort_key=SortKey.REVENUE)
        ranked = RankTemplatesHandler(_template_repo()).handle(criteria)
        assert [m.template_id for m in ranked] == ["3", "1", "2"]

    def test_usage_ties_keep_input_order(self):
        criteria = FilterCriteria(sort_key=SortKey.USAGE, ascending=True)
        ranked = RankTemplatesHandler(_template_repo()).handle(criteria)
        assert [m.template_id for m in ranked] == ["1", "3", "2"]


class TestCreateTemplate:

    def test_creates_and_persists(self):
        repo = _template_repo()
        dto = CreateTemplateHandler(repo).handle(
            name="Rice Type",
            selection_mode="single",
            options=[TemplateOptionSpec("White"), TemplateOptionSpec("Brown", "1.50", True)],
        )
        assert dto.id == "5"
        assert dto.selection_mode == "single"
        assert repo.saved == ["5"]
        assert repo.get_by_id("5").options[1].additional_price == Money.of("1.50")

    def test_first_template_gets_id_one(self):
        dto = CreateTemplateHandler(FakeTemplateRepository()).handle(
            "Size", "multiple", [TemplateOptionSpec("S")]
        )
        assert dto.id == "1"

    def test_bad_mode_rejected(self):
        with pytest.raises(ValidationError, match="Selection mode"):
            CreateTemplateHandler(_template_repo()).handle("X", "some", [TemplateOptionSpec("A")])

    def test_duplicate_name_rejected(self):
        with pytest.raises(ValidationError, match="already exists"):
            CreateTemplateHandler(_template_repo()).handle(
                "spice level", "single", [TemplateOptionSpec("A")]
            )

    def test_needs_options(self):
        with pytest.raises(ValidationError, match="at least one option"):
            CreateTemplateHandler(_template_repo()).handle("Sides", "single", [])

    def test_bad_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            CreateTemplateHandler(_template_repo()).handle(
                "Sides", "single", [TemplateOptionSpec("Fries", "lots")]
            )


class TestReorderTemplateOptions:

    def test_moves_option(self):
        repo = _template_repo()
        dto = ReorderTemplateOptionsHandler(repo).handle("1", 0, 2)
        assert [o.name for o in dto.options] == ["Large", "Small"]
        assert repo.saved == ["1"]

    def test_unknown_template(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ReorderTemplateOptionsHandler(_template_repo()).handle("99", 0, 1)


class TestListMenuItems:

    def _repo(self) -> FakeMenuItemRepository:
        return FakeMenuItemRepository([
            MenuItem.create("1", "Roti Canai", "Bread", Money.of("2.50")),
            MenuItem.create("2", "Nasi Lemak", "Rice", Money.of("8.90")),
            MenuItem.create("3", "Teh Tarik", "Drinks", Money.of("3.00"), is_available=False),
        ])

    def test_unsorted_keeps_catalog_order(self):
        items = ListMenuItemsHandler(self._repo()).handle()
        assert [i.id for i in items] == ["1", "2", "3"]

    def test_price_ascending_and_available_only(self):
        criteria = FilterCriteria(
            flags=frozenset({"available_only"}), sort_key=SortKey.PRICE, ascending=True
        )
        items = ListMenuItemsHandler(self._repo()).handle(criteria)
        assert [i.name for i in items] == ["Roti Canai", "Nasi Lemak"]
        assert items[1].price == "RM 8.90"

    def test_date_filter_not_supported(self):
        criteria = FilterCriteria(start=datetime(2026, 1, 1, tzinfo=timezone.utc))
        with pytest.raises(ValidationError, match="Cannot filter menu items"):
            ListMenuItemsHandler(self._repo()).handle(criteria)
