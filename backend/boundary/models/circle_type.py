"""Circle type reference data."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boundary.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class CircleType(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """Kind of circle a user can create (family, friends, ...).

    Rows are seeded; the API only reads them.
    """

    __tablename__ = "circle_types"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None] = mapped_column(String(50))
    color: Mapped[str | None] = mapped_column(String(7))
    default_settings: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
