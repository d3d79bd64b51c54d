"""Load a chat export file from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from chat_stats.exceptions import (
    ExportReadError,
    ExportTooLargeError,
    UnsupportedExportError,
)

logger = logging.getLogger(__name__)

MAX_EXPORT_BYTES = 10 * 1024 * 1024
ALLOWED_SUFFIXES = {".txt"}


def read_export(
    path: Path | str,
    max_bytes: int = MAX_EXPORT_BYTES,
    encoding: str = "utf-8-sig",
) -> str:
    """Read a plain-text export and return its decoded contents.

    Undecodable bytes are replaced rather than rejected; a single corrupt
    byte should not cost the whole conversation.
    """
    path = Path(path)
    if path.suffix.lower() not in ALLOWED_SUFFIXES:
        raise UnsupportedExportError(
            f"Only .txt chat exports are supported, got '{path.name}'."
        )
    if not path.is_file():
        raise ExportReadError(f"Chat export not found at {path}.")

    try:
        size = path.stat().st_size
        if size > max_bytes:
            raise ExportTooLargeError(
                f"Chat export is {size} bytes; the limit is {max_bytes} bytes."
            )
        data = path.read_bytes()
    except OSError as e:
        raise ExportReadError(f"Failed to read chat export {path}: {e}") from e

    logger.info("Read chat export %s (%d bytes)", path.name, size)
    return data.decode(encoding, errors="replace")
