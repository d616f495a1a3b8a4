from datetime import date

from ledger import CompletionLedger

DAY = date(2024, 3, 10)


def test_toggle_adds_then_removes():
    ledger = CompletionLedger()
    ledger.toggle(DAY, "a")
    assert ledger.is_completed(DAY, "a")
    assert ledger.completion_count(DAY) == 1

    ledger.toggle(DAY, "a")
    assert not ledger.is_completed(DAY, "a")
    assert ledger.completion_count(DAY) == 0


def test_removing_last_id_drops_the_day():
    ledger = CompletionLedger()
    ledger.toggle(DAY, "a")
    ledger.toggle(DAY, "b")
    ledger.toggle(DAY, "a")
    assert ledger.days() == [DAY]
    ledger.toggle(DAY, "b")
    assert ledger.days() == []
    assert ledger.to_record() == {}


def test_toggle_twice_restores_state_for_every_pair():
    ledger = CompletionLedger()
    ledger.toggle(DAY, "a")
    before = ledger.to_record()
    for habit_id in ("a", "b"):
        prior = ledger.is_completed(DAY, habit_id)
        ledger.toggle(DAY, habit_id)
        ledger.toggle(DAY, habit_id)
        assert ledger.is_completed(DAY, habit_id) == prior
    assert ledger.to_record() == before


def test_no_empty_days_after_mixed_operations():
    ledger = CompletionLedger()
    days = [date(2024, 1, d) for d in range(1, 6)]
    for i, day in enumerate(days):
        for habit_id in ("a", "b", "c")[: i % 3 + 1]:
            ledger.toggle(day, habit_id)
    for day in days[::2]:
        for habit_id in ledger.completed_ids(day):
            ledger.toggle(day, habit_id)
    ledger.remove_habit("a")

    record = ledger.to_record()
    assert all(ids for ids in record.values())
    assert all(ledger.completion_count(d) > 0 for d in ledger.days())


def test_absent_day_reads_as_empty():
    ledger = CompletionLedger()
    assert not ledger.is_completed(DAY, "a")
    assert ledger.completion_count(DAY) == 0
    assert ledger.completed_ids(DAY) == frozenset()


def test_remove_habit_cascades_across_days():
    ledger = CompletionLedger()
    ledger.toggle(date(2024, 1, 1), "a")
    ledger.toggle(date(2024, 1, 2), "a")
    ledger.toggle(date(2024, 1, 2), "b")

    assert ledger.remove_habit("a") == 2
    assert ledger.days() == [date(2024, 1, 2)]
    assert ledger.completed_ids(date(2024, 1, 2)) == {"b"}
    assert ledger.completed_days("a") == []


def test_record_uses_zero_padded_day_keys():
    ledger = CompletionLedger()
    ledger.toggle(date(987, 2, 3), "x")
    ledger.toggle(date(2024, 12, 31), "y")
    assert ledger.to_record() == {"0987-02-03": ["x"], "2024-12-31": ["y"]}


def test_total_completions_counts_every_day():
    ledger = CompletionLedger.from_days(
        {date(2023, 5, 1): {"a", "b"}, date(2024, 1, 1): {"a"}, date(2024, 1, 2): set()}
    )
    assert ledger.total_completions() == 3
    assert len(ledger) == 2
