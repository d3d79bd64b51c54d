"""Feature extraction, aggregation and report building."""

from chat_stats.stats.aggregator import Aggregator
from chat_stats.stats.features import classify_media, extract_emojis, extract_features, extract_words
from chat_stats.stats.models import AggregateState, MediaCategory, MessageFeatures, RankedEntry, Report
from chat_stats.stats.report import build_report

__all__ = [
    "AggregateState",
    "Aggregator",
    "MediaCategory",
    "MessageFeatures",
    "RankedEntry",
    "Report",
    "build_report",
    "classify_media",
    "extract_emojis",
    "extract_features",
    "extract_words",
]
