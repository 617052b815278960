"""``flask seed``: reference data the mobile app expects to exist."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from boundary.core.extensions import db
from boundary.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _seed(ctx: click.Context, failure: str) -> None:
    try:
        summary = seed_data.run_all(db, verbose=ctx.obj["verbose"])
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"{failure}: {exc}") from exc
    _echo_summary(summary)


def _echo_summary(summary: Mapping[str, Mapping[str, int]]) -> None:
    click.echo("Seeded:")
    if not summary:
        click.echo("  nothing to do")
        return
    width = max(map(len, summary))
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table:<{width}}  {counters.get('created', 0):>3} created"
            f"  {counters.get('existing', 0):>3} kept"
        )


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded row.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Reference-data seeding commands."""
    ctx.obj = {"verbose": verbose}
    level = logging.DEBUG if verbose else logging.INFO
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert missing circle types and refresh the existing ones."""
    _seed(ctx, "Seeding failed")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed. Development and tests only."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError(
            "'flask seed fresh' is restricted to non-production environments."
        )
    if not yes:
        click.confirm("Drop every application table and recreate it?", abort=True)
    LOGGER.info("seed.fresh dropping schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(ctx, "Fresh seed failed")


@seed_cli.command("list")
def list_command() -> None:
    """Print the built-in circle types without touching the database."""
    for fixture in seed_data.CIRCLE_TYPE_FIXTURES:
        click.echo(f"{fixture['name']:<12} {fixture['display_name']}  ({fixture['icon']})")
