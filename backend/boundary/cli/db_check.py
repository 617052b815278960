"""``flask db-check``: connectivity and row counts per application table."""

from __future__ import annotations

import click
from flask.cli import with_appcontext
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from boundary.core.extensions import db


@click.command("db-check")
@with_appcontext
def db_check_command() -> None:
    """Ping the database and report how many rows each table holds."""
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise click.ClickException(f"Database unreachable: {exc.__class__.__name__}") from exc
    click.echo(f"Connected: {db.engine.url.render_as_string(hide_password=True)}")

    failed = False
    for table in db.metadata.sorted_tables:
        try:
            count = db.session.execute(select(func.count()).select_from(table)).scalar_one()
        except SQLAlchemyError:
            db.session.rollback()
            click.echo(f"  {table.name}: missing")
            failed = True
            continue
        click.echo(f"  {table.name}: {count}")
    db.session.rollback()
    if failed:
        raise click.ClickException("Some tables are missing; run 'flask db upgrade'.")
