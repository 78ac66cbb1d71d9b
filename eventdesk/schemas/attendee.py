"""
Pydantic schemas for attendee input validation.
"""

from pydantic import BaseModel

from eventdesk.schemas.fields import RequiredText


class AttendeeCreate(BaseModel):
    name: RequiredText
    contact_info: RequiredText


class ContactUpdate(BaseModel):
    contact_info: RequiredText
