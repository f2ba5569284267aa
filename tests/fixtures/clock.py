from datetime import date, datetime, time
from src.app.services.clock import Clock


class FixedClock(Clock):
    """Clock frozen at a given instant; set() moves it"""

    def __init__(self, now: datetime):
        self._now = now

    @classmethod
    def on(cls, day: date, at: time = time(12, 0)) -> "FixedClock":
        return cls(datetime.combine(day, at))

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now
