# app/services/clock.py
#
# Clock
# Supplies "now" and "today" to validation and timestamping so both can be
# pinned in tests.

from datetime import date, datetime


class SystemClock:
    """Server clock, local time."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()
