"""API blueprint package."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, e.g. ``"/api/mobile"``.
    entries:
        ``(blueprint, relative_prefix)`` pairs; an empty relative prefix mounts
        the blueprint at ``base_prefix`` itself.
    """
    for bp, rel_prefix in entries:
        segments = [base_prefix.strip("/"), rel_prefix.strip("/")]
        app.register_blueprint(bp, url_prefix="/" + "/".join(s for s in segments if s))


def init_app(app: Flask) -> None:
    """Mount the mobile API under ``API_BASE_PREFIX/MOBILE_API_PREFIX``."""
    from boundary.api.mobile import REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    mobile = app.config.get("MOBILE_API_PREFIX", "mobile").strip("/")
    register_blueprint_group(app, base_prefix=f"{api_base}/{mobile}", entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
