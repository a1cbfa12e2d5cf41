"""Pydantic models for store entities and their typed create/patch inputs"""
from typing import Any, Dict, Type, TypeVar, Union, get_args

from pydantic import BaseModel

from habitquest.models.activity import (
    Activity,
    ActivityCreate,
    ActivityType,
    ActivityUpdate,
    Completion,
)
from habitquest.models.journal import (
    JournalEntry,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalPrompt,
    JournalPromptCreate,
)
from habitquest.models.reward import Reward, RewardCreate, RewardUpdate
from habitquest.models.todo import (
    Todo,
    TodoCategory,
    TodoCreate,
    TodoPriority,
    TodoRecurrence,
    TodoUpdate,
)

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=BaseModel)


def coerce_input(model: Type[M], data: Union[M, Dict[str, Any]]) -> M:
    """Accept either a model instance or a plain dict for ``model``"""
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    return model.model_validate(data)


def _accepts_none(model: Type[BaseModel], name: str) -> bool:
    field = model.model_fields.get(name)
    if field is None:
        return True
    return type(None) in get_args(field.annotation)


def apply_patch(entity: E, patch: BaseModel, **extra: Any) -> E:
    """
    Return a copy of ``entity`` with the fields set on ``patch`` merged in

    Only fields the caller explicitly set are applied, so a patch can clear
    an optional field by setting it to None. None for a field the entity
    requires (e.g. ``name``) means "leave unchanged". ``extra`` is merged
    last (e.g. a refreshed ``updated_at``). The result is re-validated.
    """
    model = type(entity)
    changes = {
        name: value
        for name, value in patch.model_dump(exclude_unset=True).items()
        if value is not None or _accepts_none(model, name)
    }
    changes.update(extra)
    return model.model_validate({**entity.model_dump(), **changes})


__all__ = [
    "Activity",
    "ActivityCreate",
    "ActivityType",
    "ActivityUpdate",
    "Completion",
    "JournalEntry",
    "JournalEntryCreate",
    "JournalEntryUpdate",
    "JournalPrompt",
    "JournalPromptCreate",
    "Reward",
    "RewardCreate",
    "RewardUpdate",
    "Todo",
    "TodoCategory",
    "TodoCreate",
    "TodoPriority",
    "TodoRecurrence",
    "TodoUpdate",
    "coerce_input",
    "apply_patch",
]
