"""Reward models"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class RewardCreate(BaseModel):
    """Caller-supplied fields for a new reward"""
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = ""
    level: int
    xp_required: int
    user_id: str
    image_url: Optional[str] = None


class Reward(BaseModel):
    """Level-gated unlockable"""
    id: str
    name: str
    description: str = ""
    level: int
    xp_required: int
    user_id: str
    unlocked: bool = False
    claimed_at: Optional[datetime] = None
    created_at: datetime
    image_url: Optional[str] = None


class RewardUpdate(BaseModel):
    """Editable reward fields; unlocking only happens through a claim"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    level: Optional[int] = None
    xp_required: Optional[int] = None
    image_url: Optional[str] = None
