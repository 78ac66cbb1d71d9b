"""
Reusable annotated field types for input schemas.

Free text is stored unescaped in comma-delimited records, so input that would
corrupt a record (commas, line breaks) is rejected here rather than in the
codec.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, StringConstraints

MIN_YEAR = 2023
MAX_YEAR = 2100


def _no_delimiters(value: str) -> str:
    if "," in value:
        raise ValueError("must not contain commas")
    if "\n" in value or "\r" in value:
        raise ValueError("must be a single line")
    return value


def _calendar_date(value: str) -> str:
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValueError("must be a real date in YYYY-MM-DD format") from None
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    return value


def _clock_time(value: str) -> str:
    hour, minute = int(value[:2]), int(value[3:])
    if hour > 23 or minute > 59:
        raise ValueError("must be a 24h time between 00:00 and 23:59")
    return value


FreeText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=255),
    AfterValidator(_no_delimiters),
]

RequiredText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
    AfterValidator(_no_delimiters),
]

DateStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    AfterValidator(_calendar_date),
]

TimeStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^\d{2}:\d{2}$"),
    AfterValidator(_clock_time),
]

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=4, max_length=100),
    AfterValidator(_no_delimiters),
]

Password = Annotated[
    str,
    StringConstraints(min_length=6, max_length=100),
    AfterValidator(_no_delimiters),
]
