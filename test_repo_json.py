import json
from datetime import date

import pytest

from models import FutureDayError, NotFound, ValidationError
from repo_json import COMPLETIONS_KEY, HABITS_KEY, HabitRepo, JSONFileStore, MemoryStore

TODAY = date(2024, 2, 10)


def _data(name, **extra):
    data = {"name": name, "description": "", "frequency": "daily", "color": "#10B981"}
    data.update(extra)
    return data


@pytest.fixture
def repo():
    return HabitRepo(MemoryStore())


def test_empty_store_loads_empty(repo):
    assert repo.list_habits() == []
    assert repo.completion_payload() == {}


def test_every_mutation_is_persisted(repo):
    habit = repo.create_habit(_data("Stretch"))
    assert json.loads(repo.store.get(HABITS_KEY))[0]["id"] == habit.id

    repo.toggle_completion(date(2024, 2, 9), habit.id, today=TODAY)
    assert json.loads(repo.store.get(COMPLETIONS_KEY)) == {"2024-02-09": [habit.id]}

    repo.toggle_completion(date(2024, 2, 9), habit.id, today=TODAY)
    assert json.loads(repo.store.get(COMPLETIONS_KEY)) == {}


def test_invalid_input_leaves_state_untouched(repo):
    with pytest.raises(ValidationError):
        repo.create_habit(_data(" x "))
    assert repo.list_habits() == []
    assert repo.store.get(HABITS_KEY) is None

    habit = repo.create_habit(_data("Journal"))
    with pytest.raises(ValidationError):
        repo.update_habit(habit.id, _data(""))
    assert repo.get_habit(habit.id).name == "Journal"


def test_toggle_refuses_future_days_and_unknown_habits(repo):
    habit = repo.create_habit(_data("Walk"))
    with pytest.raises(FutureDayError):
        repo.toggle_completion(date(2024, 2, 11), habit.id, today=TODAY)
    with pytest.raises(NotFound):
        repo.toggle_completion(TODAY, "nope", today=TODAY)
    assert repo.completion_payload() == {}
    assert repo.toggle_completion(TODAY, habit.id, today=TODAY) is True


def test_delete_cascades_and_persists(repo):
    a = repo.create_habit(_data("Alpha"))
    b = repo.create_habit(_data("Beta"))
    repo.toggle_completion(date(2024, 2, 1), a.id, today=TODAY)
    repo.toggle_completion(date(2024, 2, 2), a.id, today=TODAY)
    repo.toggle_completion(date(2024, 2, 2), b.id, today=TODAY)

    repo.delete_habit(a.id)

    assert json.loads(repo.store.get(COMPLETIONS_KEY)) == {"2024-02-02": [b.id]}
    assert [h["id"] for h in json.loads(repo.store.get(HABITS_KEY))] == [b.id]
    with pytest.raises(NotFound):
        repo.delete_habit(a.id)


def test_round_trip_through_file_store(tmp_path):
    path = str(tmp_path / "nested" / "habits.json")
    repo = HabitRepo.from_path(path)
    names = ["Water", "Read", "Sleep early"]
    habits = [repo.create_habit(_data(n, frequency="weekly")) for n in names]
    repo.toggle_completion(date(2024, 1, 31), habits[0].id, today=TODAY)
    repo.toggle_completion(date(2024, 2, 1), habits[1].id, today=TODAY)
    repo.toggle_completion(date(2024, 2, 1), habits[2].id, today=TODAY)

    reloaded = HabitRepo.from_path(path)

    assert [h.to_record() for h in reloaded.list_habits()] == [h.to_record() for h in habits]
    assert reloaded.completion_payload() == repo.completion_payload()
    assert reloaded.ledger.completed_ids(date(2024, 2, 1)) == {habits[1].id, habits[2].id}


def test_malformed_records_fall_back_to_empty():
    store = MemoryStore({HABITS_KEY: "{not json", COMPLETIONS_KEY: "[1, 2]"})
    repo = HabitRepo(store)
    assert repo.list_habits() == []
    assert repo.completion_payload() == {}


def test_habits_survive_malformed_completions():
    habits = [{"id": "h1", "name": "Yoga", "description": "", "frequency": "daily",
               "color": "#3B82F6", "createdAt": "2024-01-01T08:00:00.000Z"}]
    store = MemoryStore({HABITS_KEY: json.dumps(habits), COMPLETIONS_KEY: "oops"})
    repo = HabitRepo(store)
    assert [h.name for h in repo.list_habits()] == ["Yoga"]
    assert repo.list_habits()[0].created_at.year == 2024


def test_loading_normalizes_completions():
    habits = [{"id": "h1", "name": "Yoga", "createdAt": "2024-01-01T08:00:00+00:00"}]
    completions = {
        "2024-01-01": [],
        "2024-01-02": ["h1", "h1"],
        "2024-01-03": ["ghost"],
        "garbage": ["h1"],
    }
    store = MemoryStore({
        HABITS_KEY: json.dumps(habits),
        COMPLETIONS_KEY: json.dumps(completions),
    })
    repo = HabitRepo(store)
    assert repo.completion_payload() == {"2024-01-02": ["h1"]}


def test_file_store_recovers_from_corrupt_file(tmp_path):
    path = tmp_path / "habits.json"
    path.write_text("{{{", encoding="utf-8")
    store = JSONFileStore(str(path))
    assert store.get(HABITS_KEY) is None
    store.set(HABITS_KEY, "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {HABITS_KEY: "[]"}


def test_read_views(repo):
    a = repo.create_habit(_data("Alpha"))
    b = repo.create_habit(_data("Beta"))
    for d in range(1, 6):
        repo.toggle_completion(date(2024, 2, d), a.id, today=TODAY)
    repo.toggle_completion(TODAY, b.id, today=TODAY)

    cells = repo.calendar(2024, 2, today=TODAY)
    assert len(cells) == 35
    assert [h.name for h in repo.completed_habits(TODAY)] == ["Beta"]

    stats = repo.statistics(2024, 2, today=TODAY)
    assert stats["overall"] == {"total_completions": 6, "avg_consistency": 30}
    assert stats["habits"][0]["consistency"] == 50
    assert stats["habits"][1]["current_streak"] == 1


def test_duplicate_habit_ids_keep_first_record():
    habits = [
        {"id": "h1", "name": "Yoga", "createdAt": "2024-01-01T08:00:00+00:00"},
        {"id": "h1", "name": "Yoga2", "createdAt": "2024-01-02T08:00:00+00:00"},
    ]
    store = MemoryStore({
        HABITS_KEY: json.dumps(habits),
        COMPLETIONS_KEY: json.dumps({"2024-01-02": ["h1"]}),
    })
    repo = HabitRepo(store)
    assert [(h.id, h.name) for h in repo.list_habits()] == [("h1", "Yoga")]

    repo.delete_habit("h1")
    assert "h1" not in repo.registry
    assert repo.list_habits() == []
    assert repo.completion_payload() == {}


def test_one_bad_habit_record_keeps_the_rest():
    habits = [
        {"id": "h1", "name": "Yoga", "createdAt": "2024-01-01T08:00:00+00:00"},
        {"id": "h2"},
        "not a habit",
    ]
    store = MemoryStore({
        HABITS_KEY: json.dumps(habits),
        COMPLETIONS_KEY: json.dumps({"2024-01-02": ["h1", "h2"]}),
    })
    repo = HabitRepo(store)
    assert [h.id for h in repo.list_habits()] == ["h1"]
    assert repo.completion_payload() == {"2024-01-02": ["h1"]}
