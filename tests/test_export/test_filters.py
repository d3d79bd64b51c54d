"""Tests for system notice filtering."""

from chat_stats.export.filters import SYSTEM_NOTICES, filter_system_lines


def test_removes_encryption_notice():
    text = (
        "1/2/24, 10:00 - Messages and calls are end-to-end encrypted. Tap to learn more.\n"
        "1/2/24, 10:01 - Alice: hi"
    )
    assert filter_system_lines(text) == "1/2/24, 10:01 - Alice: hi"


def test_no_match_is_noop():
    text = "1/2/24, 10:01 - Alice: hi\nsecond line"
    assert filter_system_lines(text) == text


def test_custom_notices():
    text = "keep\ndrop me please\nkeep too"
    assert filter_system_lines(text, notices=("drop me",)) == "keep\nkeep too"


def test_empty_notices_keeps_everything():
    text = f"{SYSTEM_NOTICES[0]}\nhello"
    assert filter_system_lines(text, notices=()) == text
