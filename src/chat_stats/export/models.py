"""Data models for the export module."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date


class LineFormat(enum.Enum):
    """Supported export line shapes, in match precedence order."""

    BRACKETED = "bracketed"  # [D/M/Y, H:MM:SS AM] Name: body
    DASHED = "dashed"  # D/M/Y, H:MM am - Name: body


@dataclass
class RawMessage:
    """One tokenized message before date/time normalization."""

    line_format: LineFormat
    date_token: str
    time_token: str
    participant: str
    body: str


@dataclass(frozen=True)
class TimeOfDay:
    """A 24-hour wall-clock time as written in the export."""

    hour: int  # 0-23
    minute: int  # 0-59
    second: int | None = None


@dataclass(frozen=True)
class MessageRecord:
    """A single parsed chat message.

    ``calendar_date`` and ``time_of_day`` are None when the export's
    timestamp could not be resolved.
    """

    calendar_date: date | None
    time_of_day: TimeOfDay | None
    participant: str
    body: str
