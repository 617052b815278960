"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .db_check import db_check_command
from .seed import seed_cli


def init_app(app: Flask) -> None:
    """Register the ``seed`` group and the ``db-check`` command."""
    app.cli.add_command(seed_cli)
    app.cli.add_command(db_check_command)
