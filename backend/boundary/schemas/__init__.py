"""Request and response schemas for the mobile API."""

from boundary.schemas.calendar import (
    CalendarEventCreateSchema,
    CalendarEventQuerySchema,
    CalendarEventSchema,
    CalendarEventUpdateSchema,
    CalendarStatsSchema,
)
from boundary.schemas.circle_type import CircleTypeSchema
from boundary.schemas.common import BaseSchema, IdPathSchema, PaginationQuerySchema
from boundary.schemas.expense import (
    ExpenseCategorySchema,
    ExpenseCreateSchema,
    ExpenseQuerySchema,
    ExpenseSchema,
    ExpenseStatsSchema,
    ExpenseUpdateSchema,
)
from boundary.schemas.gallery import (
    AlbumCreateSchema,
    AlbumSchema,
    FavoriteSchema,
    GalleryStatsSchema,
    PhotoQuerySchema,
    PhotoSchema,
    PhotoUploadFilesSchema,
    PhotoUploadFormSchema,
    ShareCreateSchema,
    ShareSchema,
)

__all__ = [
    "AlbumCreateSchema",
    "AlbumSchema",
    "BaseSchema",
    "CalendarEventCreateSchema",
    "CalendarEventQuerySchema",
    "CalendarEventSchema",
    "CalendarEventUpdateSchema",
    "CalendarStatsSchema",
    "CircleTypeSchema",
    "ExpenseCategorySchema",
    "ExpenseCreateSchema",
    "ExpenseQuerySchema",
    "ExpenseSchema",
    "ExpenseStatsSchema",
    "ExpenseUpdateSchema",
    "FavoriteSchema",
    "GalleryStatsSchema",
    "IdPathSchema",
    "PaginationQuerySchema",
    "PhotoQuerySchema",
    "PhotoSchema",
    "PhotoUploadFilesSchema",
    "PhotoUploadFormSchema",
    "ShareCreateSchema",
    "ShareSchema",
]
