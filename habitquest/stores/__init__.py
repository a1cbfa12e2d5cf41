"""
State stores

Each store owns its entities exclusively and persists its full state under
its own namespace. Stores never call each other; cross-store logic lives in
habitquest.services.
"""

from habitquest.stores.activity_store import ActivityStore
from habitquest.stores.journal_store import JournalStore
from habitquest.stores.rewards_store import RewardsStore
from habitquest.stores.todo_store import TodoStore

__all__ = [
    "ActivityStore",
    "JournalStore",
    "RewardsStore",
    "TodoStore",
]
