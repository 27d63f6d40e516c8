from __future__ import annotations

from typing import List


class TimetablerError(Exception):
    """Base class for errors raised by the engine."""


class DirectoryError(TimetablerError):
    pass


class SettingsError(TimetablerError):
    pass


class StoreError(TimetablerError):
    def __init__(self, message: str, failed: List[str] | None = None):
        super().__init__(message)
        self.failed: List[str] = list(failed or [])
