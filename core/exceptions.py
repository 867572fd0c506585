"""
core/exceptions.py
------------------
Errors the desk surfaces to its callers.  Stale timer callbacks never raise;
only explicit requests (manual trades, bad transitions) end up here.
"""
from __future__ import annotations


class DeskError(Exception):
    """Base class for every error raised by the signal desk."""


class DetectionNotFoundError(DeskError, KeyError):
    def __init__(self, detection_id: str) -> None:
        super().__init__(detection_id)
        self.detection_id = detection_id

    def __str__(self) -> str:
        return f"unknown detection id: {self.detection_id!r}"


class TradeRejectedError(DeskError, ValueError):
    """Execution requested for a detection that is not ``ready``."""

    def __init__(self, detection_id: str, status: str) -> None:
        super().__init__(f"detection {detection_id!r} is {status}, expected ready")
        self.detection_id = detection_id
        self.status = status


class InvalidTransitionError(DeskError, ValueError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"illegal status transition {current} -> {requested}")
        self.current = current
        self.requested = requested
