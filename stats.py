"""Streak and consistency figures derived from the ledger on every call."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Sequence

from calendar_grid import days_in_month
from ledger import CompletionLedger

ONE_DAY = timedelta(days=1)


def round_half_up(numerator: int, denominator: int) -> int:
    """Nearest integer to numerator/denominator, halves away from zero."""
    if denominator == 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def percent(part: int, whole: int) -> int:
    return round_half_up(part * 100, whole)


def current_streak(habit_id: str, ledger: CompletionLedger, today: date) -> int:
    """
    Consecutive completed days ending yesterday, plus one if today is done.
    An unfinished today never breaks the streak.
    """
    streak = 0
    cursor = today - ONE_DAY
    while ledger.is_completed(cursor, habit_id):
        streak += 1
        cursor -= ONE_DAY
    if ledger.is_completed(today, habit_id):
        streak += 1
    return streak


def best_streak(habit_id: str, ledger: CompletionLedger) -> int:
    days = ledger.completed_days(habit_id)
    if not days:
        return 0
    best = run = 1
    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
    return best


def elapsed_days(year: int, month: int, today: date) -> int:
    """Days of the month already reached as of today."""
    if (year, month) == (today.year, today.month):
        return today.day
    if (year, month) > (today.year, today.month):
        return 0
    return days_in_month(year, month)


def monthly_consistency(
    habit_id: str, year: int, month: int, ledger: CompletionLedger, today: date
) -> int:
    days_to_count = elapsed_days(year, month, today)
    if days_to_count == 0:
        return 0
    completed = sum(
        1
        for day_num in range(1, days_to_count + 1)
        if ledger.is_completed(date(year, month, day_num), habit_id)
    )
    return percent(completed, days_to_count)


def overall_stats(
    habit_ids: Sequence[str], ledger: CompletionLedger, year: int, month: int, today: date
) -> Dict[str, int]:
    total = ledger.total_completions()
    if not habit_ids:
        return {"total_completions": total, "avg_consistency": 0}
    consistency_sum = sum(
        monthly_consistency(hid, year, month, ledger, today) for hid in habit_ids
    )
    return {
        "total_completions": total,
        "avg_consistency": round_half_up(consistency_sum, len(habit_ids)),
    }


def habit_stats(
    habit_ids: Sequence[str], ledger: CompletionLedger, year: int, month: int, today: date
) -> List[dict]:
    return [
        {
            "habit_id": hid,
            "current_streak": current_streak(hid, ledger, today),
            "best_streak": best_streak(hid, ledger),
            "consistency": monthly_consistency(hid, year, month, ledger, today),
        }
        for hid in habit_ids
    ]
