import click

from menuwallet.infrastructure.cli.menu_commands import menu_apply_templates, menu_items
from menuwallet.infrastructure.cli.template_commands import (
    template_create,
    template_list,
    template_move_option,
    template_pick,
    template_rank,
)
from menuwallet.infrastructure.cli.wallet_commands import (
    wallet_export,
    wallet_history,
    wallet_summary,
)
from menuwallet.infrastructure.logging_config import configure_root


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """menuwallet — driver wallet and vendor menu views"""
    configure_root(verbose=verbose)


@cli.group()
def wallet() -> None:
    """Driver wallet history."""


@cli.group()
def menu() -> None:
    """Vendor menu items."""


@cli.group()
def template() -> None:
    """Customization templates."""


# Register subcommands
wallet.add_command(wallet_history)
wallet.add_command(wallet_summary)
wallet.add_command(wallet_export)
menu.add_command(menu_items)
menu.add_command(menu_apply_templates)
template.add_command(template_list)
template.add_command(template_rank)
template.add_command(template_create)
template.add_command(template_move_option)
template.add_command(template_pick)
