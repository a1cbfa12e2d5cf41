"""Todo models"""
from enum import Enum
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict


class TodoCategory(str, Enum):
    """Time-of-day buckets"""
    MORNING = "morning"
    GENERAL = "general"
    EVENING = "evening"


class TodoRecurrence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TodoPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoCreate(BaseModel):
    """Caller-supplied fields for a new todo"""
    model_config = ConfigDict(extra="ignore")

    title: str
    category: TodoCategory = TodoCategory.GENERAL
    user_id: str
    recurrence: TodoRecurrence = TodoRecurrence.NONE
    priority: TodoPriority = TodoPriority.MEDIUM


class Todo(BaseModel):
    """Task item, independent of XP"""
    id: str
    title: str
    category: TodoCategory
    user_id: str
    completed: bool = False
    recurrence: TodoRecurrence = TodoRecurrence.NONE
    priority: TodoPriority = TodoPriority.MEDIUM
    last_completed_date: Optional[date] = None
    created_at: datetime
    completed_at: Optional[datetime] = None


class TodoUpdate(BaseModel):
    """Editable todo fields; completion state changes through toggle only"""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    category: Optional[TodoCategory] = None
    recurrence: Optional[TodoRecurrence] = None
    priority: Optional[TodoPriority] = None
