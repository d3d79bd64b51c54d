"""Data models for the stats module."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from datetime import date

HOURS_PER_DAY = 24


class MediaCategory(enum.Enum):
    IMAGES = "images"
    VIDEOS = "videos"
    AUDIO = "audio"
    DOCUMENTS = "documents"


@dataclass
class MessageFeatures:
    """Features extracted from one message body."""

    words: list[str] = field(default_factory=list)
    emojis: list[str] = field(default_factory=list)
    media: MediaCategory | None = None


def _empty_hours() -> list[int]:
    return [0] * HOURS_PER_DAY


def _empty_media() -> dict[MediaCategory, int]:
    return {category: 0 for category in MediaCategory}


@dataclass
class AggregateState:
    """Running counters for one analysis run.

    Dict insertion order is first-seen order and is relied on for
    tie-breaking when the report ranks participants, words and emojis.
    """

    total_messages: int = 0
    messages_by_user: dict[str, int] = field(default_factory=dict)
    messages_by_date: dict[str, int] = field(default_factory=dict)  # ISO date -> count
    messages_by_hour: list[int] = field(default_factory=_empty_hours)
    word_counts: dict[str, int] = field(default_factory=dict)
    emoji_counts: dict[str, int] = field(default_factory=dict)
    media_counts: dict[MediaCategory, int] = field(default_factory=_empty_media)
    earliest_date: date | None = None
    latest_date: date | None = None

    def merge(self, other: AggregateState) -> AggregateState:
        """Fold ``other`` into this state in place and return self.

        ``other`` must cover text that comes after this state's text for
        first-seen order to be preserved.
        """
        self.total_messages += other.total_messages
        _add_counts(self.messages_by_user, other.messages_by_user)
        _add_counts(self.messages_by_date, other.messages_by_date)
        _add_counts(self.word_counts, other.word_counts)
        _add_counts(self.emoji_counts, other.emoji_counts)
        _add_counts(self.media_counts, other.media_counts)
        for hour, count in enumerate(other.messages_by_hour):
            self.messages_by_hour[hour] += count
        if other.earliest_date is not None:
            if self.earliest_date is None or other.earliest_date < self.earliest_date:
                self.earliest_date = other.earliest_date
        if other.latest_date is not None:
            if self.latest_date is None or other.latest_date > self.latest_date:
                self.latest_date = other.latest_date
        return self


def _add_counts(target: dict, source: dict) -> None:
    for key, count in source.items():
        target[key] = target.get(key, 0) + count


@dataclass(frozen=True)
class RankedEntry:
    """One row of a top-K table."""

    value: str
    count: int


@dataclass(frozen=True)
class Report:
    """Final statistics for one chat export."""

    total_messages: int
    users: tuple[str, ...]
    duration_days: int
    avg_messages_per_day: float
    earliest_date: date | None
    latest_date: date | None
    messages_by_user: tuple[tuple[str, int], ...]
    messages_by_date: tuple[tuple[str, int], ...]  # ascending by date
    messages_by_hour: tuple[int, ...]
    top_words: tuple[RankedEntry, ...]
    top_emojis: tuple[RankedEntry, ...]
    media_counts: tuple[tuple[MediaCategory, int], ...]
    most_active_user: str | None

    @property
    def total_users(self) -> int:
        return len(self.users)

    def to_dict(self) -> dict:
        """JSON-ready dict using the camelCase field names clients expect."""
        return {
            "totalMessages": self.total_messages,
            "totalUsers": self.total_users,
            "users": list(self.users),
            "durationDays": self.duration_days,
            "avgMessagesPerDay": self.avg_messages_per_day,
            "earliestDate": self.earliest_date.isoformat() if self.earliest_date else None,
            "latestDate": self.latest_date.isoformat() if self.latest_date else None,
            "messagesByUser": {
                "labels": [user for user, _ in self.messages_by_user],
                "data": [count for _, count in self.messages_by_user],
            },
            "messagesByDate": {
                "labels": [day for day, _ in self.messages_by_date],
                "data": [count for _, count in self.messages_by_date],
            },
            "messagesByHour": {
                "labels": list(range(HOURS_PER_DAY)),
                "data": list(self.messages_by_hour),
            },
            "topWords": [{"word": e.value, "count": e.count} for e in self.top_words],
            "mediaCount": {category.value: count for category, count in self.media_counts},
            "topEmojis": [{"emoji": e.value, "count": e.count} for e in self.top_emojis],
            "mostActiveUser": self.most_active_user,
        }

    def to_json(self, **kwargs) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.to_dict(), **kwargs)
