"""Chat export parsing: filtering, tokenizing and timestamp normalization."""

from chat_stats.export.datetimes import DateOrder, parse_date, parse_time
from chat_stats.export.filters import filter_system_lines
from chat_stats.export.models import LineFormat, MessageRecord, RawMessage, TimeOfDay
from chat_stats.export.reader import read_export
from chat_stats.export.tokenizer import tokenize

__all__ = [
    "DateOrder",
    "LineFormat",
    "MessageRecord",
    "RawMessage",
    "TimeOfDay",
    "filter_system_lines",
    "parse_date",
    "parse_time",
    "read_export",
    "tokenize",
]
