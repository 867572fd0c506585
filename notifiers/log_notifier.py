# notifiers/log_notifier.py
import logging
from typing import Optional

from notifiers.base import BaseNotifier


class LogNotifier(BaseNotifier):
    """Writes the activity feed to a logger (console + rotating file)."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def send(self, text: str) -> None:
        self.logger.log(self.level, text)
