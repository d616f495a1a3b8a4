"""Habit definitions, kept in creation order."""

from __future__ import annotations

import logging
import uuid
from typing import List

from ledger import CompletionLedger
from models import Habit, NotFound

logger = logging.getLogger(__name__)


def new_habit_id() -> str:
    return uuid.uuid4().hex


class HabitRegistry:
    def __init__(self, ledger: CompletionLedger, habits: List[Habit] | None = None):
        self.ledger = ledger
        self._habits: List[Habit] = list(habits or [])

    def list(self) -> List[Habit]:
        return list(self._habits)

    def get(self, habit_id: str) -> Habit:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        raise NotFound(habit_id)

    def __contains__(self, habit_id) -> bool:
        return any(h.id == habit_id for h in self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    def create(self, data: dict) -> Habit:
        habit = Habit(
            id=new_habit_id(),
            name=data["name"],
            description=data.get("description", ""),
            frequency=data.get("frequency", "daily"),
            color=data["color"],
        )
        self._habits.append(habit)
        logger.info("Created habit %s (%s)", habit.id, habit.name)
        return habit

    def update(self, habit_id: str, data: dict) -> None:
        habit = self.get(habit_id)
        habit.name = data["name"]
        habit.description = data.get("description", "")
        habit.frequency = data.get("frequency", "daily")
        habit.color = data["color"]
        logger.info("Updated habit %s", habit_id)

    def delete(self, habit_id: str) -> None:
        habit = self.get(habit_id)
        self._habits.remove(habit)
        # cascade: no completion may outlive its habit
        touched = self.ledger.remove_habit(habit_id)
        logger.info("Deleted habit %s, cleared %d completion day(s)", habit_id, touched)
