"""Unit tests for the Todo Store (habitquest/stores/todo_store.py)"""
import pytest
from datetime import date

from habitquest.models import TodoCategory, TodoPriority, TodoRecurrence
from habitquest.stores import TodoStore
from habitquest.stores.todo_store import is_recurrence_due


@pytest.fixture
def make_todo(todo_store, test_user_id):
    def _make(title="Task", **fields):
        return todo_store.add_todo({"title": title, "user_id": test_user_id, **fields})
    return _make


# ============================================================================
# CRUD
# ============================================================================

def test_add_todo_defaults(make_todo):
    todo = make_todo("Water plants", category="morning")

    assert todo.id.startswith("todo-")
    assert todo.completed is False
    assert todo.completed_at is None
    assert todo.category == TodoCategory.MORNING
    assert todo.recurrence == TodoRecurrence.NONE
    assert todo.priority == TodoPriority.MEDIUM


def test_add_todo_rejects_unknown_category(todo_store, test_user_id):
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        todo_store.add_todo({"title": "x", "category": "afternoon", "user_id": test_user_id})


def test_update_todo_patch(todo_store, make_todo):
    todo = make_todo("Old")

    updated = todo_store.update_todo(todo.id, {"title": "New", "recurrence": "weekly", "completed": True})

    assert updated.title == "New"
    assert updated.recurrence == TodoRecurrence.WEEKLY
    assert updated.completed is False  # completion is toggle-only


def test_update_todo_none_keeps_required_fields(todo_store, make_todo):
    todo = make_todo("Stretch", category="evening")

    updated = todo_store.update_todo(todo.id, {"title": None, "category": None, "priority": "high"})

    assert updated.title == "Stretch"
    assert updated.category == TodoCategory.EVENING
    assert updated.priority == TodoPriority.HIGH


def test_update_unknown_todo_is_noop(todo_store):
    assert todo_store.update_todo("missing", {"title": "x"}) is None


def test_delete_todo(todo_store, make_todo, test_user_id):
    todo = make_todo()

    assert todo_store.delete_todo(todo.id) is True
    assert todo_store.get_todos_for_user(test_user_id) == []
    assert todo_store.delete_todo(todo.id) is False


def test_get_todos_for_user_newest_first(todo_store, make_todo, test_user_id, other_user_id):
    """Test todos come back newest-created first and scoped by owner"""
    first = make_todo("first")
    todo_store.add_todo({"title": "theirs", "user_id": other_user_id})
    second = make_todo("second")
    third = make_todo("third")

    assert [t.id for t in todo_store.get_todos_for_user(test_user_id)] == [third.id, second.id, first.id]


# ============================================================================
# Toggle
# ============================================================================

def test_toggle_todo_stamps_and_unstamps(todo_store, make_todo):
    """Test toggling flips completed and sets/clears completed_at"""
    todo = make_todo()

    done = todo_store.toggle_todo(todo.id)
    assert done.completed is True
    assert done.completed_at is not None
    assert done.last_completed_date == date(2024, 1, 3)

    undone = todo_store.toggle_todo(todo.id)
    assert undone.completed is False
    assert undone.completed_at is None
    assert undone.last_completed_date == date(2024, 1, 3)


def test_toggle_unknown_todo_is_noop(todo_store):
    assert todo_store.toggle_todo("missing") is None


# ============================================================================
# Bulk operations
# ============================================================================

def test_clear_completed_todos_only_for_user(todo_store, make_todo, test_user_id, other_user_id):
    done = make_todo("done")
    open_todo = make_todo("open")
    theirs = todo_store.add_todo({"title": "theirs", "user_id": other_user_id})
    todo_store.toggle_todo(done.id)
    todo_store.toggle_todo(theirs.id)

    assert todo_store.clear_completed_todos(test_user_id) == 1

    assert [t.id for t in todo_store.get_todos_for_user(test_user_id)] == [open_todo.id]
    assert todo_store.get_todos_for_user(other_user_id)[0].completed is True


def test_generate_todos(todo_store):
    created = todo_store.generate_todos(
        [{"title": "Plan day"}, {"title": "Inbox zero", "completed": True}],
        user_id="onboarding-user",
    )

    assert [t.user_id for t in created] == ["onboarding-user", "onboarding-user"]
    assert created[0].category == TodoCategory.MORNING
    assert created[0].completed is False
    assert created[1].completed is True
    assert created[1].completed_at is not None


# ============================================================================
# Recurrence
# ============================================================================

@pytest.mark.parametrize("recurrence,last,today,expected", [
    ("daily", date(2024, 1, 3), date(2024, 1, 3), False),
    ("daily", date(2024, 1, 2), date(2024, 1, 3), True),
    # 2024-01-07 is a Sunday
    ("weekly", date(2024, 1, 6), date(2024, 1, 7), True),
    ("weekly", date(2024, 1, 7), date(2024, 1, 13), False),
    ("monthly", date(2024, 1, 31), date(2024, 2, 1), True),
    ("monthly", date(2024, 2, 1), date(2024, 2, 29), False),
    ("monthly", date(2023, 2, 10), date(2024, 2, 10), True),
    ("none", date(2020, 1, 1), date(2024, 1, 1), False),
])
def test_is_recurrence_due(recurrence, last, today, expected):
    assert is_recurrence_due(TodoRecurrence(recurrence), last, today) is expected


def test_is_recurrence_due_never_completed():
    assert is_recurrence_due(TodoRecurrence.DAILY, None, date(2024, 1, 3)) is False


def test_reset_recurring_tasks(todo_store, make_todo):
    """Test completed recurring todos re-open once their period rolls over"""
    daily = make_todo("daily", recurrence="daily")
    weekly = make_todo("weekly", recurrence="weekly")
    one_off = make_todo("one-off")
    for todo in (daily, weekly, one_off):
        todo_store.toggle_todo(todo.id)  # completed on 2024-01-03 (Wednesday)

    assert todo_store.reset_recurring_tasks("user-123", as_of="2024-01-03") == 0
    assert todo_store.reset_recurring_tasks("user-123", as_of="2024-01-04") == 1

    by_title = {t.title: t for t in todo_store.get_todos_for_user("user-123")}
    assert by_title["daily"].completed is False
    assert by_title["daily"].completed_at is None
    assert by_title["weekly"].completed is True
    assert by_title["one-off"].completed is True

    assert todo_store.reset_recurring_tasks("user-123", as_of="2024-01-07") == 1
    assert todo_store.get_todos_for_user("user-123")[1].completed is False


def test_todos_survive_reload(todo_store, make_todo, backend, clock, test_user_id):
    todo = make_todo("persisted", priority="high")
    todo_store.toggle_todo(todo.id)

    reloaded = TodoStore(backend, clock=clock)
    [restored] = reloaded.get_todos_for_user(test_user_id)

    assert restored.id == todo.id
    assert restored.completed is True
    assert restored.priority == TodoPriority.HIGH
