"""Normalize export date and time tokens.

Exports carry no locale marker, so a date like ``01/02/24`` is ambiguous.
Patterns are tried in a fixed order and the first one that yields a valid
calendar date wins. Day-first is the default; set
``CHAT_STATS_DATE_ORDER=month-first`` (or pass ``DateOrder.MONTH_FIRST``)
for exports from month-first locales. Tokens that are valid under both
orders (day and month both <= 12) are always read with the preferred order.
"""

from __future__ import annotations

import enum
import logging
import os
import re
from datetime import date, datetime

from chat_stats.exceptions import ConfigurationError
from chat_stats.export.models import TimeOfDay

logger = logging.getLogger(__name__)


class DateOrder(enum.Enum):
    DAY_FIRST = "day-first"
    MONTH_FIRST = "month-first"


DAY_FIRST_FORMATS: tuple[str, ...] = ("%d/%m/%y", "%d/%m/%Y", "%m/%d/%y", "%m/%d/%Y")
MONTH_FIRST_FORMATS: tuple[str, ...] = ("%m/%d/%y", "%m/%d/%Y", "%d/%m/%y", "%d/%m/%Y")

_TIME_RE = re.compile(
    r"(?P<hour>\d{1,2}):(?P<minute>\d{1,2})(?::(?P<second>\d{1,2}))?"
    r"(?:\s*(?P<meridiem>[AaPp])\.?[Mm]\.?)?"
)


def resolve_date_order(value: DateOrder | str) -> DateOrder:
    """Coerce a ``DateOrder`` or its string value; raises ConfigurationError."""
    if isinstance(value, DateOrder):
        return value
    try:
        return DateOrder(value.strip().lower())
    except (AttributeError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown date order {value!r}. "
            f"Expected one of: {', '.join(o.value for o in DateOrder)}."
        ) from e


def _default_date_order() -> DateOrder:
    raw = os.environ.get("CHAT_STATS_DATE_ORDER")
    if not raw:
        return DateOrder.DAY_FIRST
    try:
        return resolve_date_order(raw)
    except ConfigurationError:
        logger.warning("Ignoring CHAT_STATS_DATE_ORDER=%r; using day-first", raw)
        return DateOrder.DAY_FIRST


DEFAULT_DATE_ORDER = _default_date_order()


def date_formats_for(order: DateOrder) -> tuple[str, ...]:
    if order is DateOrder.MONTH_FIRST:
        return MONTH_FIRST_FORMATS
    return DAY_FIRST_FORMATS


def parse_date(token: str, date_formats: tuple[str, ...] = DAY_FIRST_FORMATS) -> date | None:
    """Return the first valid date for ``token``, or None if none applies."""
    token = token.strip()
    for fmt in date_formats:
        try:
            return datetime.strptime(token, fmt).date()
        except ValueError:
            continue
    return None


def parse_time(token: str) -> TimeOfDay | None:
    """Parse ``H:MM[:SS][ am|pm]`` into a 24-hour ``TimeOfDay``.

    12 AM maps to hour 0, 12 PM stays 12 and other PM hours gain 12.
    The hour is clamped to 0-23; minutes or seconds above 59 make the
    token unparsable.
    """
    m = _TIME_RE.fullmatch(token.strip())
    if m is None:
        return None

    hour = int(m.group("hour"))
    minute = int(m.group("minute"))
    second = int(m.group("second")) if m.group("second") is not None else None
    if minute > 59 or (second is not None and second > 59):
        return None

    meridiem = m.group("meridiem")
    if meridiem:
        is_pm = meridiem.lower() == "p"
        if is_pm and hour < 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0

    return TimeOfDay(hour=max(0, min(hour, 23)), minute=minute, second=second)
