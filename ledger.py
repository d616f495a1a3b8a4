"""Sparse day -> completed habit ids map."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterator, List, Set

from models import day_key


class CompletionLedger:
    """
    Days with no completions are never stored: removing the last id for a day
    drops the day entirely.
    """

    def __init__(self):
        self._days: Dict[date, Set[str]] = {}

    # -------- Reads --------
    def is_completed(self, day: date, habit_id: str) -> bool:
        return habit_id in self._days.get(day, ())

    def completion_count(self, day: date) -> int:
        return len(self._days.get(day, ()))

    def completed_ids(self, day: date) -> frozenset:
        return frozenset(self._days.get(day, ()))

    def completed_days(self, habit_id: str) -> List[date]:
        return sorted(d for d, ids in self._days.items() if habit_id in ids)

    def total_completions(self) -> int:
        return sum(len(ids) for ids in self._days.values())

    def days(self) -> List[date]:
        return sorted(self._days)

    def __iter__(self) -> Iterator[date]:
        return iter(self.days())

    def __len__(self) -> int:
        return len(self._days)

    # -------- Mutations --------
    def toggle(self, day: date, habit_id: str) -> None:
        ids = self._days.get(day)
        if ids is not None and habit_id in ids:
            ids.discard(habit_id)
            if not ids:
                del self._days[day]
        else:
            self._days.setdefault(day, set()).add(habit_id)

    def remove_habit(self, habit_id: str) -> int:
        """Drop habit_id from every day; returns how many days were touched."""
        touched = 0
        for day in list(self._days):
            ids = self._days[day]
            if habit_id in ids:
                ids.discard(habit_id)
                touched += 1
                if not ids:
                    del self._days[day]
        return touched

    # -------- Persistence shape --------
    def to_record(self) -> Dict[str, List[str]]:
        return {day_key(d): sorted(self._days[d]) for d in sorted(self._days)}

    @classmethod
    def from_days(cls, days: Dict[date, Set[str]]) -> "CompletionLedger":
        ledger = cls()
        for day, ids in days.items():
            if ids:
                ledger._days[day] = set(ids)
        return ledger
