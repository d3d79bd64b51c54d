"""Strip chat-application system notices from raw export text."""

from __future__ import annotations

# Banners the exporting app writes into the log; never authored by a participant.
SYSTEM_NOTICES: tuple[str, ...] = (
    "Messages and calls are end-to-end encrypted",
    "Messages to this group are now secured with end-to-end encryption",
)


def filter_system_lines(text: str, notices: tuple[str, ...] | None = None) -> str:
    """Return ``text`` without any line that contains a system notice."""
    if notices is None:
        notices = SYSTEM_NOTICES
    if not notices:
        return text
    return "\n".join(
        line for line in text.split("\n")
        if not any(notice in line for notice in notices)
    )
