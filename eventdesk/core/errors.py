"""Domain error codes and error types."""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CAPACITY = "CAPACITY"
    AUTH = "AUTH"
    DECODE = "DECODE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised for malformed, empty or out-of-range input."""

    code = ErrorCode.VALIDATION


class NotFoundError(DomainError):
    """Raised when an id, username or item lookup misses."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key} not found")
        self.entity = entity
        self.key = key


class CapacityError(DomainError):
    """Raised when an allocation exceeds availability or a collection is full."""

    code = ErrorCode.CAPACITY


class AuthError(DomainError):
    """Raised on bad credentials or an invalid session."""

    code = ErrorCode.AUTH


class DecodeError(DomainError):
    """Raised when a persisted record line cannot be decoded."""

    code = ErrorCode.DECODE

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.line = line


class PersistenceError(Exception):
    """
    Hard failure reading or writing a data file.
    Not a DomainError, so run_operation lets it propagate.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
