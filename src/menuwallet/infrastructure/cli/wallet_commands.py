"""CLI commands for the driver wallet screens."""

from __future__ import annotations

from datetime import datetime, time, timezone

import click

from menuwallet.application.export_transactions import (
    EXPORT_FORMATS,
    ExportTransactionsHandler,
)
from menuwallet.application.list_transactions import ListTransactionsHandler
from menuwallet.application.summarize_wallet import SummarizeWalletHandler
from menuwallet.domain.exceptions import DomainException
from menuwallet.domain.model.criteria import FilterCriteria, SortKey
from menuwallet.domain.model.transaction import TransactionType
from menuwallet.domain.model.value_objects import Period, parse_amount
from menuwallet.infrastructure.bootstrap import transaction_repository

_PERIODS = [p.value for p in Period]
_TYPES = [t.value for t in TransactionType]


def _day_start(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def _day_end(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return datetime.combine(value.date(), time.max, tzinfo=timezone.utc)


def _build_criteria(
    search: str | None,
    tx_type: str | None,
    date_from: datetime | None,
    date_to: datetime | None,
    min_amount: str | None,
    max_amount: str | None,
    period: str | None,
    flags: list[str],
    sort: str | None,
    ascending: bool,
) -> FilterCriteria:
    if period and (date_from or date_to):
        raise click.UsageError("Use either --period or --from/--to, not both.")
    criteria = FilterCriteria(
        query=search,
        category=TransactionType(tx_type) if tx_type else None,
        start=_day_start(date_from),
        end=_day_end(date_to),
        min_amount=parse_amount(min_amount),
        max_amount=parse_amount(max_amount),
        flags=frozenset(flags),
        sort_key=SortKey(sort) if sort else None,
        ascending=ascending,
    )
    if period:
        criteria = criteria.with_period(Period(period), datetime.now(timezone.utc))
    return criteria


@click.command("history")
@click.option("--driver", "driver_id", required=True, help="Driver ID.")
@click.option("--search", default=None, help="Text to look for in description or reference.")
@click.option("--type", "tx_type", type=click.Choice(_TYPES), default=None, help="Transaction type.")
@click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]), default=None, help="First day (inclusive).")
@click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Last day (inclusive).")
@click.option("--min", "min_amount", default=None, help="Minimum amount (ignored if not a number).")
@click.option("--max", "max_amount", default=None, help="Maximum amount (ignored if not a number).")
@click.option("--period", type=click.Choice(_PERIODS), default=None, help="Quick date preset.")
@click.option("--credits-only", is_flag=True, default=False, help="Only money coming in.")
@click.option("--debits-only", is_flag=True, default=False, help="Only money going out.")
@click.option("--pending-only", is_flag=True, default=False, help="Only unprocessed transactions.")
@click.option("--sort", type=click.Choice(["date", "amount"]), default=None, help="Sort column.")
@click.option("--asc", "ascending", is_flag=True, default=False, help="Sort ascending.")
def wallet_history(
    driver_id: str,
    search: str | None,
    tx_type: str | None,
    date_from: datetime | None,
    date_to: datetime | None,
    min_amount: str | None,
    max_amount: str | None,
    period: str | None,
    credits_only: bool,
    debits_only: bool,
    pending_only: bool,
    sort: str | None,
    ascending: bool,
) -> None:
    """Show a driver's wallet transactions."""
    flags = [
        name
        for name, enabled in (
            ("credits_only", credits_only),
            ("debits_only", debits_only),
            ("pending_only", pending_only),
        )
        if enabled
    ]
    handler = ListTransactionsHandler(transaction_repo=transaction_repository())

    try:
        criteria = _build_criteria(
            search, tx_type, date_from, date_to, min_amount, max_amount,
            period, flags, sort, ascending,
        )
        rows = handler.handle(driver_id, criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Date':<17} {'Type':<18} {'Amount':>12} {'Status':<10} Description")
    click.echo("-" * 80)
    for row in rows:
        click.echo(
            f"{row.created_at:<17} {row.type_label:<18} {row.amount:>12} {row.status:<10} {row.description}"
        )
    if criteria.is_active:
        click.echo()
        click.echo(f"{len(rows)} transaction(s), {criteria.active_count} filter(s) active")


@click.command("summary")
@click.option("--driver", "driver_id", required=True, help="Driver ID.")
@click.option("--period", type=click.Choice(_PERIODS), default=None, help="Quick date preset.")
def wallet_summary(driver_id: str, period: str | None) -> None:
    """Show wallet totals for a driver."""
    handler = SummarizeWalletHandler(transaction_repo=transaction_repository())
    criteria = None
    if period:
        criteria = FilterCriteria().with_period(Period(period), datetime.now(timezone.utc))

    try:
        summary = handler.handle(driver_id, criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Transactions:  {summary.transaction_count}  ({summary.pending_count} pending)")
    click.echo(f"Credits:       {summary.total_credits}")
    click.echo(f"Debits:        {summary.total_debits}")
    click.echo(f"Fees:          {summary.total_fees}")
    click.echo(f"Net:           {summary.net}")
    if summary.by_type:
        click.echo()
        click.echo(f"  {'Type':<20} {'Count':>6} {'Total':>14}")
        click.echo(f"  {'-'*42}")
        for line in summary.by_type:
            click.echo(f"  {line.type_label:<20} {line.count:>6} {line.total:>14}")


@click.command("export")
@click.option("--driver", "driver_id", required=True, help="Driver ID.")
@click.option("--format", "fmt", type=click.Choice(list(EXPORT_FORMATS)), default="csv", help="Output format.")
@click.option("--period", type=click.Choice(_PERIODS), default="all", help="Quick date preset.")
@click.option("--output", type=click.Path(dir_okay=False, writable=True), default=None, help="Write to a file instead of stdout.")
def wallet_export(driver_id: str, fmt: str, period: str, output: str | None) -> None:
    """Export a driver's transactions as CSV or JSON."""
    handler = ExportTransactionsHandler(transaction_repo=transaction_repository())

    try:
        data = handler.handle(driver_id, fmt=fmt, period=Period(period))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if output is None:
        click.echo(data, nl=False)
        return
    with open(output, "w", encoding="utf-8") as fh:
        fh.write(data)
    click.echo(f"Exported to {output}")
