from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param page: Current page (1-based).
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param total: Total rows available.
    :type total: int
    :param has_more: Whether a further page exists.
    :type has_more: bool
    """

    page: int
    limit: int
    total: int
    has_more: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> PageMeta:
        return cls(page=page, limit=limit, total=total, has_more=page * limit < total)

    def as_dict(self) -> dict[str, Any]:
        return {"total": self.total, "page": self.page, "limit": self.limit, "hasMore": self.has_more}


@dataclass(frozen=True, slots=True)
class ListOut(Generic[T]):
    """
    A page of records plus its metadata.

    :param items: Records in the current page.
    :type items: list[T]
    :param meta: Pagination metadata.
    :type meta: PageMeta
    """

    items: list[T]
    meta: PageMeta
