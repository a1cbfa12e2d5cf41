"""Journal models"""
from typing import Optional
import datetime as dt
from pydantic import BaseModel, ConfigDict, Field


class JournalEntryCreate(BaseModel):
    """Caller-supplied fields for a new journal entry"""
    model_config = ConfigDict(extra="ignore")

    date: dt.date
    title: str
    content: str
    mood: Optional[int] = Field(default=None, ge=1, le=5)
    tags: list[str] = Field(default_factory=list)
    user_id: str


class JournalEntry(BaseModel):
    """Free-text entry for a calendar day"""
    id: str
    date: dt.date
    title: str
    content: str
    mood: Optional[int] = Field(default=None, ge=1, le=5)  # 1-5 scale
    tags: list[str] = Field(default_factory=list)
    user_id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class JournalEntryUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: Optional[dt.date] = None
    title: Optional[str] = None
    content: Optional[str] = None
    mood: Optional[int] = Field(default=None, ge=1, le=5)
    tags: Optional[list[str]] = None


class JournalPromptCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str
    category: str = ""
    user_id: str


class JournalPrompt(BaseModel):
    """Reusable writing prompt"""
    id: str
    text: str
    category: str = ""
    user_id: str
