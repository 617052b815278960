"""Application services for the mobile resources."""

from boundary.services.calendar_service import CalendarService
from boundary.services.circle_type_service import CircleTypeService
from boundary.services.expense_service import ExpenseService
from boundary.services.gallery_service import GalleryService

__all__ = ["CalendarService", "CircleTypeService", "ExpenseService", "GalleryService"]
