"""Split filtered export text into raw message tuples.

Each supported export shape is one ``LineFormat`` variant with its own
header and message patterns. Variants are tried in ``DEFAULT_FORMATS``
order and the first match wins, so the bracketed form always takes
precedence over the dashed form.

Lines without a leading date/time header are continuations of the
previous message (soft-wrapped or multi-line bodies). Lines that do carry
a header but are not ``Name: body`` shaped are app events ("Alice added
Bob", missed-call notices) and are dropped. The name must be followed by
a colon and whitespace, so ``Alice:hi`` is an event line, not a message.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from chat_stats.export.models import LineFormat, RawMessage

logger = logging.getLogger(__name__)

_DATE = r"(?P<date>\d{1,2}/\d{1,2}/\d{2,4})"
_TIME = r"(?P<time>\d{1,2}:\d{1,2}(?::\d{1,2})?(?:\s*[AaPp]\.?[Mm]\.?)?)"
_MESSAGE = r"(?P<name>[^:]+):\s(?P<body>.*)$"

# iOS exports prefix lines with a left-to-right mark; files may start with a BOM.
_INVISIBLE_PREFIX = "\u200e\ufeff"


@dataclass(frozen=True)
class _Grammar:
    header: re.Pattern
    message: re.Pattern


_GRAMMARS: dict[LineFormat, _Grammar] = {
    LineFormat.BRACKETED: _Grammar(
        header=re.compile(rf"^\[{_DATE},\s*{_TIME}\]"),
        message=re.compile(rf"^\[{_DATE},\s*{_TIME}\]\s*(?:-\s+)?{_MESSAGE}"),
    ),
    LineFormat.DASHED: _Grammar(
        header=re.compile(rf"^{_DATE},\s*{_TIME}\s*-\s"),
        message=re.compile(rf"^{_DATE},\s*{_TIME}\s*-\s+{_MESSAGE}"),
    ),
}

DEFAULT_FORMATS: tuple[LineFormat, ...] = (LineFormat.BRACKETED, LineFormat.DASHED)


def split_lines(text: str) -> list[str]:
    """Split export text into lines, tolerating CRLF line endings."""
    if not text:
        return []
    return [line.rstrip("\r") for line in text.split("\n")]


def is_message_start(line: str, formats: tuple[LineFormat, ...] = DEFAULT_FORMATS) -> bool:
    """True if ``line`` opens a new log entry (message or app event)."""
    line = line.lstrip(_INVISIBLE_PREFIX)
    return any(_GRAMMARS[fmt].header.match(line) for fmt in formats)


def message_start_offsets(
    lines: list[str],
    formats: tuple[LineFormat, ...] = DEFAULT_FORMATS,
) -> list[int]:
    """Indices of lines that begin a new log entry."""
    return [i for i, line in enumerate(lines) if is_message_start(line, formats)]


def match_line(
    line: str,
    formats: tuple[LineFormat, ...] = DEFAULT_FORMATS,
) -> RawMessage | None:
    """Match one line against the grammars in precedence order."""
    line = line.lstrip(_INVISIBLE_PREFIX)
    for fmt in formats:
        m = _GRAMMARS[fmt].message.match(line)
        if m is None:
            continue
        participant = m.group("name").strip()
        if not participant:
            continue
        return RawMessage(
            line_format=fmt,
            date_token=m.group("date"),
            time_token=m.group("time").strip(),
            participant=participant,
            body=m.group("body"),
        )
    return None


def _close(pending: RawMessage, parts: list[str]) -> RawMessage:
    while parts and not parts[-1].strip():
        parts.pop()
    if parts:
        pending.body = "\n".join([pending.body, *parts])
    return pending


def tokenize_lines(
    lines: Iterable[str],
    formats: tuple[LineFormat, ...] = DEFAULT_FORMATS,
) -> Iterator[RawMessage]:
    """Yield messages from ``lines`` in source order.

    Blank lines inside a multi-line body are kept; trailing blank lines
    before the next entry are not.
    """
    pending: RawMessage | None = None
    parts: list[str] = []
    dropped = 0

    for line in lines:
        raw = match_line(line, formats)
        if raw is not None:
            if pending is not None:
                yield _close(pending, parts)
            pending, parts = raw, []
            continue

        if is_message_start(line, formats):
            # Timestamped app event: closes the current message, not a body line.
            if pending is not None:
                yield _close(pending, parts)
                pending, parts = None, []
            dropped += 1
        elif pending is not None:
            parts.append(line)
        elif line.strip():
            dropped += 1

    if pending is not None:
        yield _close(pending, parts)

    if dropped:
        logger.debug("Dropped %d unrecognized export lines", dropped)


def tokenize(
    text: str,
    formats: tuple[LineFormat, ...] = DEFAULT_FORMATS,
) -> Iterator[RawMessage]:
    """Yield one ``RawMessage`` per logical message in ``text``."""
    return tokenize_lines(split_lines(text), formats)
