"""Turn a chat export into a statistics report.

Pipeline: filter system notices, tokenize, normalize timestamps, extract
per-message features, aggregate, build the report. Every run starts from
a fresh ``AggregateState``; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Iterable, Iterator

from chat_stats.exceptions import ConfigurationError
from chat_stats.export.datetimes import (
    DEFAULT_DATE_ORDER,
    DateOrder,
    date_formats_for,
    parse_date,
    parse_time,
    resolve_date_order,
)
from chat_stats.export.filters import SYSTEM_NOTICES, filter_system_lines
from chat_stats.export.models import LineFormat, MessageRecord, RawMessage
from chat_stats.export.reader import MAX_EXPORT_BYTES, read_export
from chat_stats.export.tokenizer import (
    DEFAULT_FORMATS,
    message_start_offsets,
    split_lines,
    tokenize_lines,
)
from chat_stats.stats.aggregator import Aggregator
from chat_stats.stats.features import MIN_WORD_LENGTH, extract_features
from chat_stats.stats.models import AggregateState, Report
from chat_stats.stats.report import DEFAULT_TOP_EMOJIS, DEFAULT_TOP_WORDS, build_report

logger = logging.getLogger(__name__)


def to_record(raw: RawMessage, date_formats: tuple[str, ...]) -> MessageRecord:
    return MessageRecord(
        calendar_date=parse_date(raw.date_token, date_formats),
        time_of_day=parse_time(raw.time_token),
        participant=raw.participant,
        body=raw.body,
    )


def _aggregate_lines(
    lines: list[str],
    formats: tuple[LineFormat, ...],
    date_formats: tuple[str, ...],
    min_word_length: int,
) -> AggregateState:
    """Tokenize and aggregate one range of lines. Runs in worker processes."""
    aggregator = Aggregator()
    unresolved = 0
    for raw in tokenize_lines(lines, formats):
        record = to_record(raw, date_formats)
        if record.calendar_date is None or record.time_of_day is None:
            unresolved += 1
        aggregator.ingest(record, extract_features(record.body, min_word_length))
    if unresolved:
        logger.debug("%d messages had an unparsable date or time", unresolved)
    return aggregator.state


def _split_ranges(lines: list[str], starts: list[int], workers: int) -> list[list[str]]:
    """Cut ``lines`` into at most ``workers`` ranges at message-start lines."""
    step = len(starts) / workers
    cuts = sorted({0, *(starts[int(i * step)] for i in range(1, workers)), len(lines)})
    return [lines[a:b] for a, b in zip(cuts, cuts[1:])]


class ChatAnalyzer:
    """Configurable chat export analyzer.

    Args:
        date_order: Which date pattern family to try first for ambiguous
            dates. Defaults to ``CHAT_STATS_DATE_ORDER`` or day-first.
        system_notices: Substrings marking lines to discard before parsing.
        formats: Export line shapes to recognize, in precedence order.
        top_words: Number of entries in the top-words table.
        top_emojis: Number of entries in the top-emojis table.
        min_word_length: Shortest word counted (never below 4).
    """

    def __init__(
        self,
        date_order: DateOrder | str = DEFAULT_DATE_ORDER,
        system_notices: tuple[str, ...] = SYSTEM_NOTICES,
        formats: tuple[LineFormat, ...] = DEFAULT_FORMATS,
        top_words: int = DEFAULT_TOP_WORDS,
        top_emojis: int = DEFAULT_TOP_EMOJIS,
        min_word_length: int = MIN_WORD_LENGTH,
    ):
        if top_words < 0 or top_emojis < 0:
            raise ConfigurationError("top_words and top_emojis must be >= 0.")
        if min_word_length < MIN_WORD_LENGTH:
            raise ConfigurationError(
                f"min_word_length must be at least {MIN_WORD_LENGTH}, got {min_word_length}."
            )
        if not formats:
            raise ConfigurationError("At least one line format is required.")
        self.date_order = resolve_date_order(date_order)
        self.date_formats = date_formats_for(self.date_order)
        self.system_notices = tuple(system_notices)
        self.formats = tuple(formats)
        self.top_words = top_words
        self.top_emojis = top_emojis
        self.min_word_length = min_word_length

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def iter_records(self, text: str) -> Iterator[MessageRecord]:
        """Yield parsed messages in conversation order."""
        for raw in tokenize_lines(self._prepare(text), self.formats):
            yield to_record(raw, self.date_formats)

    def analyze(self, text: str) -> Report:
        """Analyze an export's text. Never raises on malformed content."""
        state = self._aggregate(self._prepare(text))
        return self._finish(state)

    def analyze_parallel(self, text: str, workers: int = 2) -> Report:
        """Same result as ``analyze``, with line ranges parsed in worker processes."""
        if workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {workers}.")
        lines = self._prepare(text)
        starts = message_start_offsets(lines, self.formats)
        if workers == 1 or len(starts) < 2:
            return self._finish(self._aggregate(lines))

        ranges = _split_ranges(lines, starts, min(workers, len(starts)))
        with ProcessPoolExecutor(max_workers=len(ranges)) as pool:
            worker = partial(
                _aggregate_lines,
                formats=self.formats,
                date_formats=self.date_formats,
                min_word_length=self.min_word_length,
            )
            partials = pool.map(worker, ranges)
            state = AggregateState()
            for chunk_state in partials:
                state.merge(chunk_state)
        return self._finish(state)

    def analyze_file(self, path: Path | str, max_bytes: int = MAX_EXPORT_BYTES) -> Report:
        """Read a ``.txt`` export from disk and analyze it."""
        return self.analyze(read_export(path, max_bytes=max_bytes))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _prepare(self, text: str) -> list[str]:
        return split_lines(filter_system_lines(text, self.system_notices))

    def _aggregate(self, lines: Iterable[str]) -> AggregateState:
        return _aggregate_lines(list(lines), self.formats, self.date_formats, self.min_word_length)

    def _finish(self, state: AggregateState) -> Report:
        report = build_report(state, top_words=self.top_words, top_emojis=self.top_emojis)
        logger.info(
            "Analyzed %d messages from %d participants over %d days",
            report.total_messages, report.total_users, report.duration_days,
        )
        return report


def analyze(text: str) -> Report:
    """Analyze an export's text with default settings."""
    return ChatAnalyzer().analyze(text)


def analyze_file(path: Path | str, max_bytes: int = MAX_EXPORT_BYTES) -> Report:
    """Read and analyze a ``.txt`` export with default settings."""
    return ChatAnalyzer().analyze_file(path, max_bytes=max_bytes)
