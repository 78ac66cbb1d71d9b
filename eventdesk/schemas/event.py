"""
Pydantic schemas for event-related input validation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from eventdesk.models import EventStatus
from eventdesk.schemas.fields import DateStr, FreeText, RequiredText, TimeStr


class EventCreate(BaseModel):
    name: RequiredText
    date: DateStr
    time: TimeStr
    location: FreeText = ""
    description: FreeText = ""
    category: FreeText = ""


class EventUpdate(BaseModel):
    """Partial update; fields left as None keep their current value."""

    name: Optional[RequiredText] = None
    date: Optional[DateStr] = None
    time: Optional[TimeStr] = None
    location: Optional[FreeText] = None
    description: Optional[FreeText] = None
    category: Optional[FreeText] = None
    status: Optional[EventStatus] = None


class EventSearch(BaseModel):
    keyword: str = Field(..., min_length=1)
