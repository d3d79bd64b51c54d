"""Tests for the export tokenizer."""

from chat_stats.export.models import LineFormat, RawMessage
from chat_stats.export.tokenizer import (
    is_message_start,
    match_line,
    message_start_offsets,
    split_lines,
    tokenize,
)


def test_bracketed_line():
    (msg,) = tokenize("[1/2/24, 10:00:00 AM] Alice: hello there")
    assert isinstance(msg, RawMessage)
    assert msg.line_format is LineFormat.BRACKETED
    assert msg.date_token == "1/2/24"
    assert msg.time_token == "10:00:00 AM"
    assert msg.participant == "Alice"
    assert msg.body == "hello there"


def test_dashed_line():
    (msg,) = tokenize("2/2/24, 9:05 pm - Bob: hi Alice")
    assert msg.line_format is LineFormat.DASHED
    assert msg.date_token == "2/2/24"
    assert msg.time_token == "9:05 pm"
    assert msg.participant == "Bob"
    assert msg.body == "hi Alice"


def test_mixed_formats_keep_source_order():
    text = "[1/2/24, 10:00:00 AM] Alice: hello there\n2/2/24, 9:05 pm - Bob: hi Alice"
    assert [m.participant for m in tokenize(text)] == ["Alice", "Bob"]


def test_narrow_no_break_space_before_meridiem():
    (msg,) = tokenize("2/2/24, 9:05\u202fpm - Bob: hi")
    assert msg.time_token == "9:05\u202fpm"


def test_continuation_lines_join_previous_body():
    text = (
        "12/01/2024, 10:00 - Alice: first line\n"
        "second line\n"
        "\n"
        "12/01/2024, 10:01 - Bob: ok"
    )
    messages = list(tokenize(text))
    assert len(messages) == 2
    assert messages[0].body == "first line\nsecond line"
    assert messages[1].body == "ok"


def test_timestamped_event_ends_message_and_is_dropped():
    text = (
        "12/01/2024, 10:00 - Alice: hi\n"
        "12/01/2024, 10:01 - Alice added Bob\n"
        "orphan line"
    )
    messages = list(tokenize(text))
    assert len(messages) == 1
    assert messages[0].body == "hi"


def test_leading_unrecognized_lines_dropped():
    text = "Chat with Alice\n[1/2/24, 10:00:00] Alice: hi"
    messages = list(tokenize(text))
    assert len(messages) == 1
    assert messages[0].participant == "Alice"


def test_participant_trimmed_and_body_keeps_colons():
    (msg,) = tokenize("[1/2/24, 10:00:00]  Alice Smith : note: bring snacks")
    assert msg.participant == "Alice Smith"
    assert msg.body == "note: bring snacks"


def test_left_to_right_mark_prefix():
    (msg,) = tokenize("\u200e[1/2/24, 10:00:00] Alice: \u200eimage omitted")
    assert msg.participant == "Alice"
    assert "image omitted" in msg.body


def test_crlf_line_endings():
    text = "1/2/24, 10:00 - Alice: one\r\n1/2/24, 10:01 - Bob: two\r\n"
    assert [m.body for m in tokenize(text)] == ["one", "two"]


def test_restricting_formats():
    assert list(tokenize("[1/2/24, 10:00:00] Alice: hi", formats=(LineFormat.DASHED,))) == []


def test_match_line_rejects_plain_text():
    assert match_line("just some words") is None


def test_is_message_start():
    assert is_message_start("1/2/24, 10:00 - Alice added Bob")
    assert is_message_start("[1/2/24, 10:00:00] Alice: hi")
    assert not is_message_start("wrapped text")


def test_message_start_offsets():
    lines = split_lines("intro\n1/2/24, 10:00 - A: x\nmore\n1/2/24, 10:01 - B: y")
    assert message_start_offsets(lines) == [1, 3]


def test_tokenize_is_lazy():
    stream = tokenize("1/2/24, 10:00 - A: x")
    assert next(stream).participant == "A"


def test_empty_text():
    assert split_lines("") == []
    assert list(tokenize("")) == []


def test_long_continuation_run():
    wrapped = ["x" * 40] * 50_000
    text = "\n".join(["1/2/24, 10:00 - Alice: start", *wrapped, "1/2/24, 10:01 - Bob: end"])
    messages = list(tokenize(text))
    assert len(messages) == 2
    assert messages[0].body == "\n".join(["start", *wrapped])
    assert messages[1].body == "end"


def test_blank_lines_inside_body_kept():
    text = "1/2/24, 10:00 - Alice: a\n\nb\n\n1/2/24, 10:01 - Bob: c"
    messages = list(tokenize(text))
    assert [m.body for m in messages] == ["a\n\nb", "c"]


def test_name_requires_space_after_colon():
    assert list(tokenize("[1/2/24, 10:00:00] Alice:hi")) == []
    assert match_line("1/2/24, 10:00 - Alice:hi") is None


def test_event_without_colon_space_closes_message():
    text = "1/2/24, 10:00 - Alice: hi\n1/2/24, 10:01 - Bob:http://example.com\nafter"
    messages = list(tokenize(text))
    assert len(messages) == 1
    assert messages[0].body == "hi"


def test_bracketed_line_never_matches_dashed():
    line = "[1/2/24, 10:00:00 AM] Alice: hello"
    assert match_line(line, formats=(LineFormat.DASHED,)) is None
    assert match_line(line).line_format is LineFormat.BRACKETED


def test_dashed_line_never_matches_bracketed():
    line = "2/2/24, 9:05 pm - Bob: hi"
    assert match_line(line, formats=(LineFormat.BRACKETED,)) is None
    assert match_line(line).line_format is LineFormat.DASHED
