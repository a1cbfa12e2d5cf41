"""XP activity and completion models"""
from enum import Enum
from typing import Optional
import datetime as dt
from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    """Activity types"""
    CORE = "core"
    BONUS = "bonus"


class ActivityCreate(BaseModel):
    """Caller-supplied fields for a new activity"""
    model_config = ConfigDict(extra="ignore")

    name: str
    xp: int
    type: ActivityType = ActivityType.CORE
    category: str = ""
    user_id: str
    daily_cap: Optional[int] = Field(default=None, ge=1)  # completions per day, core only
    linked_to_habit: Optional[str] = None  # habit id
    linked_to_todo: Optional[str] = None  # todo category


class Activity(BaseModel):
    """XP-earning activity definition"""
    id: str
    name: str
    xp: int = Field(frozen=True)  # fixed at creation
    type: ActivityType
    category: str = ""
    user_id: str
    daily_cap: Optional[int] = None
    linked_to_habit: Optional[str] = None
    linked_to_todo: Optional[str] = None
    created_at: dt.datetime


class ActivityUpdate(BaseModel):
    """
    Editable activity fields

    ``xp`` is deliberately absent: an ``xp`` key in a dict patch is dropped
    during validation.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    type: Optional[ActivityType] = None
    category: Optional[str] = None
    daily_cap: Optional[int] = Field(default=None, ge=1)
    linked_to_habit: Optional[str] = None
    linked_to_todo: Optional[str] = None


class Completion(BaseModel):
    """One completion of an activity on a calendar day"""
    activity_id: str
    date: dt.date
    xp_earned: int  # snapshot of the activity's XP
    completed_at: dt.datetime
