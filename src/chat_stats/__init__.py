"""Statistics for plain-text chat exports.

    from chat_stats import analyze
    report = analyze(export_text)
    report.to_dict()
"""

from chat_stats.analyzer import ChatAnalyzer, analyze, analyze_file
from chat_stats.export.datetimes import DateOrder
from chat_stats.stats.models import Report

__all__ = [
    "ChatAnalyzer",
    "DateOrder",
    "Report",
    "analyze",
    "analyze_file",
]
