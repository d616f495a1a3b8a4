# repo_json.py
import json
import logging
import os
from datetime import date
from typing import Dict, List, Optional, Set

from calendar_grid import Cell, build_month
from ledger import CompletionLedger
from models import (
    FutureDayError,
    Habit,
    NotFound,
    parse_day_key,
    validate_habit_data,
)
from registry import HabitRegistry
from stats import habit_stats, overall_stats

logger = logging.getLogger(__name__)

HABITS_KEY = "habits"
COMPLETIONS_KEY = "completions"


# -------- Key-value stores --------
class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JSONFileStore:
    """String values for every key, kept together in one JSON object file."""

    def __init__(self, path: str):
        self.path = path
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.data = self._read()

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s (%s); starting empty.", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: top level is not an object.", self.path)
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _write(self, obj):
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self._write(self.data)


# -------- Record codec --------
def load_habits(raw: Optional[str]) -> List[Habit]:
    if raw is None:
        return []
    try:
        records = json.loads(raw)
        if not isinstance(records, list):
            raise ValueError("habits record is not a list")
    except ValueError as exc:
        logger.warning("Malformed habits record (%s); starting with no habits.", exc)
        return []

    habits: List[Habit] = []
    seen: Set[str] = set()
    for index, record in enumerate(records):
        try:
            habit = Habit.from_record(record)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Skipping malformed habit at index %d (%s).", index, exc)
            continue
        if habit.id in seen:
            logger.warning("Skipping duplicate habit id %s at index %d.", habit.id, index)
            continue
        seen.add(habit.id)
        habits.append(habit)
    return habits


def load_completions(raw: Optional[str], known_ids: Set[str]) -> CompletionLedger:
    if raw is None:
        return CompletionLedger()
    try:
        record = json.loads(raw)
        if not isinstance(record, dict):
            raise ValueError("completions record is not an object")
    except ValueError as exc:
        logger.warning("Malformed completions record (%s); starting empty.", exc)
        return CompletionLedger()

    days: Dict[date, Set[str]] = {}
    for key, ids in record.items():
        try:
            day = parse_day_key(key)
        except ValueError:
            logger.warning("Skipping unparseable day key %r.", key)
            continue
        if not isinstance(ids, list):
            logger.warning("Skipping day %s: ids are not a list.", key)
            continue
        kept = {str(i) for i in ids if str(i) in known_ids}
        if len(kept) < len(set(map(str, ids))):
            logger.warning("Dropped completions for unknown habits on %s.", key)
        if kept:
            days[day] = kept
    return CompletionLedger.from_days(days)


def dump_habits(habits: List[Habit]) -> str:
    return json.dumps([h.to_record() for h in habits])


def dump_completions(ledger: CompletionLedger) -> str:
    return json.dumps(ledger.to_record())


# -------- Repository facade --------
class HabitRepo:
    """
    Owns the registry and ledger for the app shell. Every write validates,
    mutates, then persists both records once.
    """

    def __init__(self, store):
        self.store = store
        habits = load_habits(store.get(HABITS_KEY))
        self.ledger = load_completions(
            store.get(COMPLETIONS_KEY), {h.id for h in habits}
        )
        self.registry = HabitRegistry(self.ledger, habits)
        logger.info(
            "Loaded %d habit(s) and %d completion day(s).", len(habits), len(self.ledger)
        )

    @classmethod
    def from_path(cls, path: str) -> "HabitRepo":
        return cls(JSONFileStore(path))

    def save(self):
        self.store.set(HABITS_KEY, dump_habits(self.registry.list()))
        self.store.set(COMPLETIONS_KEY, dump_completions(self.ledger))

    # -------- Habits --------
    def list_habits(self) -> List[Habit]:
        return self.registry.list()

    def get_habit(self, habit_id: str) -> Habit:
        return self.registry.get(habit_id)

    def create_habit(self, data: dict) -> Habit:
        habit = self.registry.create(validate_habit_data(data))
        self.save()
        return habit

    def update_habit(self, habit_id: str, data: dict):
        cleaned = validate_habit_data(data)
        self.registry.update(habit_id, cleaned)
        self.save()

    def delete_habit(self, habit_id: str):
        self.registry.delete(habit_id)
        self.save()

    # -------- Completions --------
    def toggle_completion(self, day: date, habit_id: str, today: Optional[date] = None) -> bool:
        """Flip one habit on one day; returns the new completed state."""
        today = today or date.today()
        if day > today:
            raise FutureDayError(day)
        if habit_id not in self.registry:
            raise NotFound(habit_id)
        self.ledger.toggle(day, habit_id)
        self.save()
        return self.ledger.is_completed(day, habit_id)

    def completed_habits(self, day: date) -> List[Habit]:
        ids = self.ledger.completed_ids(day)
        return [h for h in self.registry.list() if h.id in ids]

    # -------- Read views --------
    def calendar(self, year: int, month: int, today: Optional[date] = None) -> List[Cell]:
        return build_month(year, month, self.ledger, len(self.registry), today)

    def statistics(self, year: int, month: int, today: Optional[date] = None) -> dict:
        today = today or date.today()
        ids = [h.id for h in self.registry.list()]
        return {
            "overall": overall_stats(ids, self.ledger, year, month, today),
            "habits": habit_stats(ids, self.ledger, year, month, today),
        }

    def completion_payload(self) -> Dict[str, List[str]]:
        return self.ledger.to_record()
