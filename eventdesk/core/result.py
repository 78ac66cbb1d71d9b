"""
Explicit operation results for the console boundary.

Services raise DomainError subclasses; run_operation turns those into an
OperationResult the caller inspects instead of catching. Anything that is not
a DomainError (PersistenceError, programming errors) propagates unchanged.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import pydantic

from eventdesk.core.errors import DomainError, ErrorCode, ValidationError
from eventdesk.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None


def validation_message(exc: pydantic.ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts)


def run_operation(fn: Callable[..., T], *args: Any, **kwargs: Any) -> OperationResult[T]:
    name = getattr(fn, "__name__", repr(fn))
    try:
        return OperationResult(value=fn(*args, **kwargs))
    except DomainError as e:
        logger.info("operation_failed", operation=name, code=e.code.value, error=e.message)
        return OperationResult(error=e)
    except pydantic.ValidationError as e:
        message = validation_message(e)
        logger.info("operation_failed", operation=name, code=ErrorCode.VALIDATION.value, error=message)
        return OperationResult(error=ValidationError(message))
