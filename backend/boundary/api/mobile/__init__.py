"""Mobile API blueprints."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .calendar import bp as calendar_bp
from .circle_types import bp as circle_types_bp
from .expenses import bp as expenses_bp
from .gallery import bp as gallery_bp
from .health import bp as health_bp

# Each tuple: (blueprint, url_prefix relative to the mobile namespace)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/mobile/health
    (calendar_bp, "/calendar"),
    (circle_types_bp, "/circle-types"),
    (expenses_bp, "/expenses"),
    (gallery_bp, "/gallery"),
]
