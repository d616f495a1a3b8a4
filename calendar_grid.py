"""Month grid used by the dashboard calendar."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Tuple, Union

from ledger import CompletionLedger

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass(frozen=True)
class EmptyCell:
    """Padding before the 1st and after the last day; never clickable."""


@dataclass(frozen=True)
class DayCell:
    day: date
    is_today: bool
    is_future: bool
    completion_count: int
    completion_ratio: float

    @property
    def clickable(self) -> bool:
        return not self.is_future


Cell = Union[EmptyCell, DayCell]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months; month is 1-12."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_in_month(year: int, month: int) -> int:
    next_year, next_month = shift_month(year, month, 1)
    return (date(next_year, next_month, 1) - timedelta(days=1)).day


def first_weekday(year: int, month: int) -> int:
    """Column of the 1st in a Sunday-first week (Sunday == 0)."""
    return (date(year, month, 1).weekday() + 1) % 7


def month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def build_month(
    year: int,
    month: int,
    ledger: CompletionLedger,
    habit_count: int,
    today: date | None = None,
) -> List[Cell]:
    today = today or date.today()
    cells: List[Cell] = [EmptyCell() for _ in range(first_weekday(year, month))]

    for day_num in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_num)
        count = ledger.completion_count(day)
        ratio = count / habit_count if habit_count > 0 else 0.0
        cells.append(
            DayCell(
                day=day,
                is_today=day == today,
                is_future=day > today,
                completion_count=count,
                completion_ratio=ratio,
            )
        )

    while len(cells) % 7:
        cells.append(EmptyCell())
    return cells


def weeks(cells: List[Cell]) -> List[List[Cell]]:
    """Split a grid into rows of seven for rendering."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
