"""Idempotent reference-data seeders."""

from __future__ import annotations

import logging
from typing import Any

from flask_sqlalchemy import SQLAlchemy

from boundary.repositories.circle_type import CircleTypeRepository

LOGGER = logging.getLogger(__name__)

CIRCLE_TYPE_FIXTURES: list[dict[str, Any]] = [
    {
        "name": "family",
        "display_name": "Family",
        "description": "Household members sharing calendars, expenses and photos.",
        "icon": "home-heart",
        "color": "#FF6B6B",
        "default_settings": {"allowLocationSharing": True, "allowExpenseSharing": True},
        "is_system": True,
    },
    {
        "name": "friends",
        "display_name": "Friends",
        "description": "Friends planning events and splitting costs.",
        "icon": "account-group",
        "color": "#4ECDC4",
        "default_settings": {"allowLocationSharing": False, "allowExpenseSharing": True},
        "is_system": True,
    },
    {
        "name": "sharehouse",
        "display_name": "Sharehouse",
        "description": "Housemates sharing bills and chores.",
        "icon": "home-city",
        "color": "#F7DC6F",
        "default_settings": {"allowLocationSharing": False, "allowExpenseSharing": True},
        "is_system": True,
    },
    {
        "name": "work",
        "display_name": "Work",
        "description": "Colleagues coordinating schedules.",
        "icon": "briefcase",
        "color": "#2196F3",
        "default_settings": {"allowLocationSharing": False, "allowExpenseSharing": False},
        "is_system": True,
    },
]


def seed_circle_types(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Insert missing circle types and refresh existing ones by ``name``."""
    repo = CircleTypeRepository(session=database.session)
    created = existing = 0
    for fixture in CIRCLE_TYPE_FIXTURES:
        attrs = dict(fixture)
        _, was_created = repo.upsert(attrs.pop("name"), **attrs)
        if was_created:
            created += 1
        else:
            existing += 1
        if verbose:
            LOGGER.debug("circle_type %s %s", fixture["name"], "created" if was_created else "kept")
    database.session.commit()
    return {"circle_types": {"created": created, "existing": existing}}


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run every seeder in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_circle_types,):
        for table, counters in func(database, verbose=verbose).items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["CIRCLE_TYPE_FIXTURES", "run_all", "seed_circle_types"]
