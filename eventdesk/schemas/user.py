"""
Pydantic schemas for user-related input validation.
"""

from pydantic import BaseModel

from eventdesk.models import Role
from eventdesk.schemas.fields import Password, Username


class UserCreate(BaseModel):
    username: Username
    password: Password
    role: Role = Role.REGULAR_USER


class UserLogin(BaseModel):
    username: str
    password: str
