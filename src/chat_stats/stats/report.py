"""Derive the final report from an aggregate state."""

from __future__ import annotations

from chat_stats.stats.models import AggregateState, RankedEntry, Report

DEFAULT_TOP_WORDS = 20
DEFAULT_TOP_EMOJIS = 10


def top_k(counts: dict[str, int], k: int) -> tuple[RankedEntry, ...]:
    """Highest counts first; equal counts keep first-seen order."""
    # sorted() is stable, so ties stay in dict insertion order.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(RankedEntry(value=value, count=count) for value, count in ranked[:k])


def most_active(counts: dict[str, int]) -> str | None:
    """Participant with the most messages; the earliest-seen wins a tie."""
    best: str | None = None
    best_count = 0
    for user, count in counts.items():
        if best is None or count > best_count:
            best, best_count = user, count
    return best


def build_report(
    state: AggregateState,
    top_words: int = DEFAULT_TOP_WORDS,
    top_emojis: int = DEFAULT_TOP_EMOJIS,
) -> Report:
    if state.earliest_date is not None and state.latest_date is not None:
        duration_days = (state.latest_date - state.earliest_date).days + 1
    else:
        duration_days = 0
    avg = round(state.total_messages / duration_days, 2) if duration_days else 0.0

    return Report(
        total_messages=state.total_messages,
        users=tuple(state.messages_by_user),
        duration_days=duration_days,
        avg_messages_per_day=avg,
        earliest_date=state.earliest_date,
        latest_date=state.latest_date,
        messages_by_user=tuple(state.messages_by_user.items()),
        messages_by_date=tuple(sorted(state.messages_by_date.items())),
        messages_by_hour=tuple(state.messages_by_hour),
        top_words=top_k(state.word_counts, top_words),
        top_emojis=top_k(state.emoji_counts, top_emojis),
        media_counts=tuple(state.media_counts.items()),
        most_active_user=most_active(state.messages_by_user),
    )
