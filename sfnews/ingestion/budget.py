"""Daily call budget for the backup search provider."""

import logging
from datetime import date
from typing import Callable, Optional

import pendulum

logger = logging.getLogger(__name__)


def _today() -> date:
    return pendulum.today().date()


class DailyBudget:
    """
    In-process counter of backup calls used today.

    The counter resets the first time it is read on a new calendar day. It
    is read-then-incremented without locking, so it is only correct inside
    a single process.
    """

    def __init__(self, limit: int = 100, today: Optional[Callable[[], date]] = None) -> None:
        """
        Initialize daily budget.

        Args:
            limit: Provider daily call quota
            today: Clock returning the current date (injectable for tests)
        """
        self.limit = limit
        self._today = today or _today
        self.used = 0
        self.reset_date = self._today()

    def _check_reset(self) -> None:
        current = self._today()
        if current != self.reset_date:
            logger.info("Daily budget reset (%s -> %s)", self.reset_date, current)
            self.used = 0
            self.reset_date = current

    def remaining(self) -> int:
        """Calls left for today."""
        self._check_reset()
        return max(0, self.limit - self.used)

    def consume(self) -> None:
        """Record one call against today's quota."""
        self._check_reset()
        self.used += 1
