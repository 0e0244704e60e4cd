"""CLI commands for customization templates."""

from __future__ import annotations

import click

from menuwallet.application.browse_session import BrowseSession
from menuwallet.application.bulk_apply_templates import BulkApplyTemplatesHandler
from menuwallet.application.dto import TemplateOptionSpec
from menuwallet.application.list_templates import ListTemplatesHandler
from menuwallet.application.manage_templates import (
    CreateTemplateHandler,
    ReorderTemplateOptionsHandler,
)
from menuwallet.application.rank_templates import RankTemplatesHandler
from menuwallet.domain.exceptions import DomainException
from menuwallet.domain.model.criteria import FilterCriteria, SortKey
from menuwallet.domain.service.record_fields import TEMPLATE_FIELDS
from menuwallet.infrastructure.bootstrap import menu_item_repository, template_repository
from menuwallet.infrastructure.cli.menu_commands import parse_ids


def _parse_options(raw: str) -> list[TemplateOptionSpec]:
    """Parse 'Small:0,Large:2.50*' into option specs; '*' marks a default."""
    specs: list[TemplateOptionSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        is_default = pair.endswith("*")
        pair = pair.rstrip("*")
        name, _, price = pair.partition(":")
        specs.append(
            TemplateOptionSpec(
                name=name.strip(),
                additional_price=price.strip() or "0",
                is_default=is_default,
            )
        )
    return specs


@click.command("list")
@click.option("--search", default=None, help="Text to look for in name or description.")
@click.option("--category", default=None, help="Derived category, e.g. 'Spice Level'.")
@click.option("--required-only", is_flag=True, default=False, help="Only required templates.")
@click.option("--active-only", is_flag=True, default=False, help="Only active templates.")
@click.option("--sort", type=click.Choice(["name", "usage", "date"]), default=None, help="Sort column.")
@click.option("--asc", "ascending", is_flag=True, default=False, help="Sort ascending.")
def template_list(
    search: str | None,
    category: str | None,
    required_only: bool,
    active_only: bool,
    sort: str | None,
    ascending: bool,
) -> None:
    """List customization templates (most used first)."""
    flags = {
        name
        for name, enabled in (("required_only", required_only), ("active_only", active_only))
        if enabled
    }
    handler = ListTemplatesHandler(template_repo=template_repository())

    try:
        criteria = FilterCriteria(
            query=search,
            category=category,
            flags=frozenset(flags),
            sort_key=SortKey(sort) if sort else None,
            ascending=ascending,
        )
        templates = handler.handle(criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not templates:
        click.echo("No templates found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<16} {'Mode':<9} {'Req':<4} {'Uses':>6}")
    click.echo("-" * 70)
    for t in templates:
        required = "yes" if t.is_required else "no"
        name = t.name if t.is_active else f"{t.name} (inactive)"
        click.echo(
            f"{t.id:<6} {name:<24} {t.category:<16} {t.selection_mode:<9} {required:<4} {t.usage_count:>6}"
        )


@click.command("rank")
@click.option("--search", default=None, help="Text to look for in the template name.")
@click.option(
    "--sort",
    type=click.Choice(["performance", "revenue", "usage", "name"]),
    default=None,
    help="Sort column (default: performance).",
)
@click.option("--asc", "ascending", is_flag=True, default=False, help="Sort ascending.")
def template_rank(search: str | None, sort: str | None, ascending: bool) -> None:
    """Rank templates by performance."""
    handler = RankTemplatesHandler(template_repo=template_repository())

    try:
        criteria = FilterCriteria(
            query=search,
            sort_key=SortKey(sort) if sort else None,
            ascending=ascending,
        )
        metrics = handler.handle(criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not metrics:
        click.echo("No template analytics found.")
        return

    click.echo(f"{'#':>3} {'Template':<24} {'Score':>12} {'Uses':>6} {'Revenue':>12} Last used")
    click.echo("-" * 78)
    for rank, m in enumerate(metrics, start=1):
        click.echo(
            f"{rank:>3} {m.template_name:<24} {m.performance_score:>12} {m.usage_count:>6} {m.revenue:>12} {m.last_used_at}"
        )


@click.command("create")
@click.option("--name", required=True, help="Template name.")
@click.option("--mode", type=click.Choice(["single", "multiple"]), default="single", help="Selection mode.")
@click.option("--options", "options_raw", required=True, help="Options as 'Name:Price,Name:Price*' ('*' = default).")
@click.option("--required", "is_required", is_flag=True, default=False, help="Customer must choose.")
@click.option("--description", default=None, help="Optional description.")
def template_create(
    name: str,
    mode: str,
    options_raw: str,
    is_required: bool,
    description: str | None,
) -> None:
    """Create a customization template."""
    handler = CreateTemplateHandler(template_repo=template_repository())

    try:
        dto = handler.handle(
            name=name,
            selection_mode=mode,
            options=_parse_options(options_raw),
            is_required=is_required,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Template #{dto.id} '{dto.name}' created with {len(dto.options)} option(s)")


@click.command("move-option")
@click.option("--id", "template_id", required=True, help="Template ID.")
@click.option("--from", "old_index", required=True, type=int, help="Current position (0-based).")
@click.option("--to", "new_index", required=True, type=int, help="Drop position (0-based).")
def template_move_option(template_id: str, old_index: int, new_index: int) -> None:
    """Move an option within a template."""
    handler = ReorderTemplateOptionsHandler(template_repo=template_repository())

    try:
        dto = handler.handle(template_id, old_index, new_index)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for index, option in enumerate(dto.options):
        marker = "*" if option.is_default else " "
        click.echo(f"  {index}. {option.name:<20} {option.additional_price:>10} {marker}")


# --- Interactive picker -------------------------------------------------------

_PICK_HELP = """\
  /TEXT        search            /            clear search
  t ID         toggle template   all          select all shown
  none         clear selection   mv FROM TO   reorder selection
  sort KEY     name|usage|date   done         apply    quit  abort"""


def _show_picker(session: BrowseSession) -> None:
    selection = session.selection
    visible = session.visible()
    if session.error:
        click.echo(f"! {session.error}")
    if not visible:
        click.echo("No templates found.")
    for t in visible:
        mark = "x" if t.id in selection else " "
        click.echo(f"[{mark}] {t.id:<6} {t.name:<24} {t.category:<16} {t.usage_count:>5} uses")
    order = ", ".join(t.name for t in session.selected_records()) or "-"
    click.echo(f"Selected ({len(selection)}): {order}")


def _run_pick_command(session: BrowseSession, line: str) -> str | None:
    """Apply one picker command; returns 'done' or 'quit' to stop."""
    if line.startswith("/"):
        text = line[1:]
        if text.strip():
            session.submit_query(text)
        else:
            session.clear_query()
        return None

    word, _, rest = line.partition(" ")
    args = rest.split()
    if word in ("done", "quit"):
        return word
    if word == "t" and len(args) == 1:
        session.toggle(args[0])
    elif word == "all":
        session.select_all_visible()
    elif word == "none":
        session.clear_selection()
    elif word == "mv" and len(args) == 2 and all(a.isdigit() for a in args):
        session.reorder_selection(int(args[0]), int(args[1]))
    elif word == "sort" and len(args) == 1 and args[0] in ("name", "usage", "date"):
        order = session.choose_sort(SortKey(args[0]))
        click.echo(f"Sorted by {order.key.value} ({'asc' if order.ascending else 'desc'})")
    else:
        click.echo(_PICK_HELP)
    return None


@click.command("pick")
@click.option("--items", "items_raw", required=True, help="Menu item IDs to apply the picked templates to.")
def template_pick(items_raw: str) -> None:
    """Interactively pick templates, in order, and apply them to menu items."""
    item_ids = parse_ids(items_raw)
    repo = template_repository()
    handler = BulkApplyTemplatesHandler(
        menu_item_repo=menu_item_repository(),
        template_repo=repo,
    )

    with BrowseSession(
        loader=repo.list_all,
        fields=TEMPLATE_FIELDS,
        criteria=FilterCriteria(flags=frozenset({"active_only"})),
    ) as session:
        click.echo(_PICK_HELP)
        while True:
            _show_picker(session)
            line = click.prompt(">", default="", show_default=False).strip()
            try:
                outcome = _run_pick_command(session, line)
            except DomainException as exc:
                click.echo(f"! {exc}")
                continue
            if outcome == "quit":
                click.echo("Nothing applied.")
                return
            if outcome == "done":
                break
        template_ids = list(session.selection.ids)

    try:
        result = handler.handle(item_ids, template_ids)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Applied {result.templates_applied} template(s) to {result.items_updated} "
        f"menu item(s) ({result.attachments_created} new attachment(s))."
    )
