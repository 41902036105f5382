"""Duty status providers.

A duty ("nöbetçi") pharmacy stays open outside normal hours on a rotating
schedule. The schedule comes from an external feed, modelled here as a
provider queried per pharmacy and time.
"""

from datetime import date, datetime
from typing import Protocol


class DutyStatusProvider(Protocol):
    """Answers whether a pharmacy is on duty at a given time."""

    def is_on_duty(self, pharmacy_id: str, at_time: datetime) -> bool: ...


class NoDutyInformation:
    """Provider used when no duty schedule is available: nobody is on duty."""

    def is_on_duty(self, pharmacy_id: str, at_time: datetime) -> bool:
        return False


class StaticDutySchedule:
    """Duty schedule given as a mapping of calendar date to on-duty pharmacy ids."""

    def __init__(self, schedule: dict[date, set[str]] | None = None) -> None:
        self._schedule: dict[date, set[str]] = {day: set(ids) for day, ids in (schedule or {}).items()}

    def add(self, day: date, pharmacy_id: str) -> None:
        self._schedule.setdefault(day, set()).add(pharmacy_id)

    def is_on_duty(self, pharmacy_id: str, at_time: datetime) -> bool:
        return pharmacy_id in self._schedule.get(at_time.date(), set())
