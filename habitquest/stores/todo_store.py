"""
Todo Store

Recurring and one-off tasks, independent of XP. Completion state only
changes through ``toggle_todo`` and ``reset_recurring_tasks``.
"""

from typing import Any, Dict, List, Optional, Union
from datetime import date
import logging

from habitquest.models import (
    Todo,
    TodoCategory,
    TodoCreate,
    TodoRecurrence,
    TodoUpdate,
    apply_patch,
    coerce_input,
)
from habitquest.storage import PersistentStore
from habitquest.utils.datetime_helpers import DateLike, generate_id, start_of_week, to_date

logger = logging.getLogger(__name__)


def is_recurrence_due(recurrence: TodoRecurrence, last_completed: Optional[date], today: date) -> bool:
    """
    Whether a completed recurring todo has rolled over into a new period

    - daily: completed on a different day
    - weekly: completed before the start of the current (Sunday-based) week
    - monthly: completed in a different month or year
    """
    if last_completed is None:
        return False

    if recurrence == TodoRecurrence.DAILY:
        return last_completed != today
    if recurrence == TodoRecurrence.WEEKLY:
        return last_completed < start_of_week(today)
    if recurrence == TodoRecurrence.MONTHLY:
        return (last_completed.year, last_completed.month) != (today.year, today.month)
    return False


class TodoStore(PersistentStore):
    """Todo items scoped by user"""

    namespace = "todo-storage"

    def _reset_state(self) -> None:
        self.todos: List[Todo] = []

    def _restore_state(self, state: Dict[str, Any]) -> None:
        self.todos = [Todo.model_validate(t) for t in state.get("todos", [])]

    def _dump_state(self) -> Dict[str, Any]:
        return {"todos": [t.model_dump(mode="json") for t in self.todos]}

    def _find_index(self, todo_id: str) -> Optional[int]:
        return next((i for i, t in enumerate(self.todos) if t.id == todo_id), None)

    def add_todo(self, data: Union[TodoCreate, Dict[str, Any]]) -> Todo:
        """Create an uncompleted todo"""
        create = coerce_input(TodoCreate, data)
        todo = Todo(
            **create.model_dump(),
            id=generate_id("todo"),
            completed=False,
            created_at=self.clock(),
        )
        self.todos.append(todo)
        self._persist()

        logger.info(f"Added todo '{todo.title}' for user {todo.user_id}")
        return todo

    def update_todo(self, todo_id: str, updates: Union[TodoUpdate, Dict[str, Any]]) -> Optional[Todo]:
        """Merge editable fields; None if the id is unknown"""
        patch = coerce_input(TodoUpdate, updates)
        index = self._find_index(todo_id)
        if index is None:
            return None

        self.todos[index] = apply_patch(self.todos[index], patch)
        self._persist()
        return self.todos[index]

    def toggle_todo(self, todo_id: str) -> Optional[Todo]:
        """
        Flip completion

        Completing stamps ``completed_at`` and ``last_completed_date``;
        un-completing clears ``completed_at`` only.
        """
        index = self._find_index(todo_id)
        if index is None:
            return None

        todo = self.todos[index]
        if todo.completed:
            changes = {"completed": False, "completed_at": None}
        else:
            now = self.clock()
            changes = {
                "completed": True,
                "completed_at": now,
                "last_completed_date": now.date(),
            }

        self.todos[index] = todo.model_copy(update=changes)
        self._persist()

        logger.debug(f"Toggled todo {todo_id} → completed={changes['completed']}")
        return self.todos[index]

    def delete_todo(self, todo_id: str) -> bool:
        """Remove a todo permanently"""
        index = self._find_index(todo_id)
        if index is None:
            return False

        del self.todos[index]
        self._persist()
        return True

    def get_todos_for_user(self, user_id: str) -> List[Todo]:
        """Todos owned by ``user_id``, newest first"""
        return sorted(
            (t for t in self.todos if t.user_id == user_id),
            key=lambda t: t.created_at,
            reverse=True,
        )

    def clear_completed_todos(self, user_id: str) -> int:
        """
        Delete every completed todo of ``user_id``

        Returns:
            Number of todos removed
        """
        remaining = [t for t in self.todos if t.user_id != user_id or not t.completed]
        removed = len(self.todos) - len(remaining)
        if removed:
            self.todos = remaining
            self._persist()
            logger.info(f"Cleared {removed} completed todos for user {user_id}")
        return removed

    def reset_recurring_tasks(self, user_id: str, as_of: Optional[DateLike] = None) -> int:
        """
        Un-complete recurring todos whose period has rolled over

        Args:
            user_id: Owner whose todos are checked
            as_of: Day treated as today (defaults to the store clock)

        Returns:
            Number of todos reset
        """
        today = to_date(as_of) if as_of is not None else self.today()
        reset = 0

        for index, todo in enumerate(self.todos):
            if (
                todo.user_id == user_id
                and todo.completed
                and todo.recurrence != TodoRecurrence.NONE
                and is_recurrence_due(todo.recurrence, todo.last_completed_date, today)
            ):
                self.todos[index] = todo.model_copy(update={"completed": False, "completed_at": None})
                reset += 1

        if reset:
            self._persist()
            logger.info(f"Reset {reset} recurring todos for user {user_id}")
        return reset

    def generate_todos(self, items: List[Dict[str, Any]], user_id: str) -> List[Todo]:
        """
        Bulk-create todos for ``user_id``

        Args:
            items: Dicts with ``title`` and optional ``completed``,
                ``category``, ``recurrence``, ``priority``
            user_id: Owner of every generated todo
        """
        created = []
        for item in items:
            create = TodoCreate.model_validate({
                "category": TodoCategory.MORNING,
                **item,
                "user_id": user_id,
            })
            now = self.clock()
            completed = bool(item.get("completed", False))
            created.append(Todo(
                **create.model_dump(),
                id=generate_id("todo"),
                completed=completed,
                created_at=now,
                completed_at=now if completed else None,
            ))

        self.todos.extend(created)
        self._persist()

        logger.info(f"Generated {len(created)} todos for user {user_id}")
        return created
