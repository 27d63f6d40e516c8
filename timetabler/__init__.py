"""Class timetable generation for the school portal."""

__version__ = "0.1.0"
