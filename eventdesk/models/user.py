"""
User model with role tag.

Key design decisions:
- Role is a plain enum tag; menus dispatch on it instead of on a class hierarchy
- Enum values are the persisted ordinals, so they must never be renumbered
- Passwords are stored as given (plaintext), matching the record file format
"""

from dataclasses import dataclass
from enum import IntEnum


class Role(IntEnum):
    ADMIN = 0
    REGULAR_USER = 1
    NONE = 2


@dataclass
class User:
    username: str
    password: str
    role: Role = Role.REGULAR_USER
    id: int = 0  # 0 until the store assigns one

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role.name})>"
