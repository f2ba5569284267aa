"""Clock Interface

Injectable source of the current time for due-date comparisons and
year-based invoice numbering.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current UTC time (naive)"""
        pass

    def today(self) -> date:
        """Start of the current day, time of day stripped"""
        return self.now().date()
