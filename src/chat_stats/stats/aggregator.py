"""Fold parsed messages into running counters."""

from __future__ import annotations

from chat_stats.export.models import MessageRecord
from chat_stats.stats.models import AggregateState, MessageFeatures


class Aggregator:
    """Sole owner of the mutable ``AggregateState`` for one analysis run."""

    def __init__(self, state: AggregateState | None = None) -> None:
        self.state = state if state is not None else AggregateState()

    def ingest(self, record: MessageRecord, features: MessageFeatures) -> None:
        """Count one message. Unresolved dates/times skip their buckets only."""
        state = self.state
        state.total_messages += 1
        by_user = state.messages_by_user
        by_user[record.participant] = by_user.get(record.participant, 0) + 1

        day = record.calendar_date
        if day is not None:
            key = day.isoformat()
            state.messages_by_date[key] = state.messages_by_date.get(key, 0) + 1
            if state.earliest_date is None or day < state.earliest_date:
                state.earliest_date = day
            if state.latest_date is None or day > state.latest_date:
                state.latest_date = day

        if record.time_of_day is not None:
            state.messages_by_hour[record.time_of_day.hour] += 1

        for word in features.words:
            state.word_counts[word] = state.word_counts.get(word, 0) + 1
        for emoji in features.emojis:
            state.emoji_counts[emoji] = state.emoji_counts.get(emoji, 0) + 1
        if features.media is not None:
            state.media_counts[features.media] += 1
