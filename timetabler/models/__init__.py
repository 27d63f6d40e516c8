# Re-export common types
from .cell import BREAK_NAME, ScheduleCell
from .entities import SchoolClass, Subject, Teacher, User
from .period import TimeSlot
from .timetable import ClassSchedule, Timetable

__all__ = [
    "BREAK_NAME",
    "ScheduleCell",
    "SchoolClass",
    "Subject",
    "Teacher",
    "User",
    "TimeSlot",
    "ClassSchedule",
    "Timetable",
]
