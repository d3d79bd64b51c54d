"""Unified exception hierarchy for chat-stats."""


class ChatStatsError(Exception):
    """Base exception for all chat-stats errors."""


# Export files
class ExportError(ChatStatsError):
    """Base exception for chat export file handling."""


class ExportReadError(ExportError):
    """Failed to read a chat export file."""


class ExportTooLargeError(ExportError):
    """Chat export exceeds the configured size ceiling."""


class UnsupportedExportError(ExportError):
    """File is not a plain-text chat export."""


# Configuration
class ConfigurationError(ChatStatsError):
    """Invalid analyzer configuration."""
