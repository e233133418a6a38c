"""CLI entry point for the account load generator."""

from __future__ import annotations

import click

from account_loadgen.cli.commands import check_health, register, run


@click.group()
def cli() -> None:
    """Account service load generator."""


cli.add_command(run)
cli.add_command(register)
cli.add_command(check_health)
