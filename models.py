# models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

FREQUENCIES = ("daily", "weekly")

PRESET_COLORS = [
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#14B8A6",  # teal
    "#F97316",  # orange
]

NAME_MIN = 2
NAME_MAX = 50
DESCRIPTION_MAX = 200


# ---------- Errors ----------
class HabitError(Exception):
    """Base class for errors raised by the tracking core."""


class ValidationError(HabitError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class NotFound(HabitError):
    def __init__(self, habit_id: str):
        super().__init__(f"No habit with id '{habit_id}'.")
        self.habit_id = habit_id


class FutureDayError(HabitError):
    def __init__(self, day: date):
        super().__init__(f"Cannot record completions for future day {day_key(day)}.")
        self.day = day


# ---------- Habit ----------
def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Habit:
    id: str
    name: str
    description: str = ""
    frequency: str = "daily"  # descriptive only, never enforced
    color: str = PRESET_COLORS[0]
    created_at: datetime = field(default_factory=_utc_now)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "frequency": self.frequency,
            "color": self.color,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, raw: dict) -> "Habit":
        created = raw.get("createdAt")
        return cls(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw.get("description") or "",
            frequency=raw.get("frequency") or "daily",
            color=raw.get("color") or PRESET_COLORS[0],
            created_at=parse_timestamp(created) if created else _utc_now(),
        )


def parse_timestamp(raw: str) -> datetime:
    # older records end in "Z"
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


# ---------- Day keys ----------
def day_key(d: date) -> str:
    """Format a local calendar date as YYYY-MM-DD from its own fields."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_day_key(raw: str) -> date:
    return datetime.strptime(raw, "%Y-%m-%d").date()


# ---------- Validation ----------
def validate_habit_data(data: dict) -> dict:
    """
    Check form input for create/update and return the cleaned fields.
    Raises ValidationError naming the first offending field.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("name", "Habit name is required")
    if len(name) < NAME_MIN:
        raise ValidationError("name", f"Habit name must be at least {NAME_MIN} characters")
    if len(name) > NAME_MAX:
        raise ValidationError("name", f"Habit name must be at most {NAME_MAX} characters")

    description = (data.get("description") or "").strip()
    if len(description) > DESCRIPTION_MAX:
        raise ValidationError(
            "description", f"Description must be at most {DESCRIPTION_MAX} characters"
        )

    frequency = data.get("frequency") or "daily"
    if frequency not in FREQUENCIES:
        raise ValidationError("frequency", "Frequency must be 'daily' or 'weekly'")

    color = data.get("color") or ""
    if not color:
        raise ValidationError("color", "Pick a color")

    return {
        "name": name,
        "description": description,
        "frequency": frequency,
        "color": color,
    }
