# notifiers/base.py
"""
notifiers/base.py
-----------------
A single-method interface every activity-feed notifier must implement.
"""
from __future__ import annotations
from abc import ABC, abstractmethod


class BaseNotifier(ABC):
    """Every concrete notifier must implement send()."""

    @abstractmethod
    def send(self, text: str) -> None:
        """Deliver one formatted feed line."""
        raise NotImplementedError
