"""CLI commands for the vendor menu screens."""

from __future__ import annotations

import click

from menuwallet.application.bulk_apply_templates import BulkApplyTemplatesHandler
from menuwallet.application.list_menu_items import ListMenuItemsHandler
from menuwallet.domain.exceptions import DomainException
from menuwallet.domain.model.criteria import FilterCriteria, SortKey
from menuwallet.domain.model.value_objects import parse_amount
from menuwallet.infrastructure.bootstrap import menu_item_repository, template_repository


def parse_ids(raw: str) -> list[str]:
    """Parse '1,2, 3' into ['1', '2', '3']."""
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not ids:
        raise click.BadParameter("Expected a comma-separated list of IDs.")
    return ids


@click.command("items")
@click.option("--search", default=None, help="Text to look for in name or description.")
@click.option("--category", default=None, help="Exact category name.")
@click.option("--min", "min_price", default=None, help="Minimum price (ignored if not a number).")
@click.option("--max", "max_price", default=None, help="Maximum price (ignored if not a number).")
@click.option("--available-only", is_flag=True, default=False, help="Hide unavailable items.")
@click.option("--sort", type=click.Choice(["name", "price", "category"]), default=None, help="Sort column.")
@click.option("--asc", "ascending", is_flag=True, default=False, help="Sort ascending.")
def menu_items(
    search: str | None,
    category: str | None,
    min_price: str | None,
    max_price: str | None,
    available_only: bool,
    sort: str | None,
    ascending: bool,
) -> None:
    """List menu items."""
    handler = ListMenuItemsHandler(menu_item_repo=menu_item_repository())

    try:
        criteria = FilterCriteria(
            query=search,
            category=category,
            min_amount=parse_amount(min_price),
            max_amount=parse_amount(max_price),
            flags=frozenset({"available_only"} if available_only else ()),
            sort_key=SortKey(sort) if sort else None,
            ascending=ascending,
        )
        items = handler.handle(criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("No menu items found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<16} {'Price':>10} {'Available':>10} {'Templates':>10}")
    click.echo("-" * 81)
    for item in items:
        available = "yes" if item.is_available else "no"
        click.echo(
            f"{item.id:<6} {item.name:<24} {item.category:<16} {item.price:>10} {available:>10} {item.template_count:>10}"
        )


@click.command("apply-templates")
@click.option("--items", "items_raw", required=True, help="Menu item IDs as 'ID,ID'.")
@click.option("--templates", "templates_raw", required=True, help="Template IDs as 'ID,ID', in apply order.")
def menu_apply_templates(items_raw: str, templates_raw: str) -> None:
    """Attach templates to several menu items at once."""
    handler = BulkApplyTemplatesHandler(
        menu_item_repo=menu_item_repository(),
        template_repo=template_repository(),
    )

    try:
        result = handler.handle(parse_ids(items_raw), parse_ids(templates_raw))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Applied {result.templates_applied} template(s) to {result.items_updated} "
        f"menu item(s) ({result.attachments_created} new attachment(s))."
    )
