from boundary.models.calendar import CalendarEvent, EventAttendee
from boundary.models.circle_type import CircleType
from boundary.models.expense import Expense, ExpenseSplit
from boundary.models.gallery import Album, Photo, PhotoShare

__all__ = [
    "Album",
    "CalendarEvent",
    "CircleType",
    "EventAttendee",
    "Expense",
    "ExpenseSplit",
    "Photo",
    "PhotoShare",
]
