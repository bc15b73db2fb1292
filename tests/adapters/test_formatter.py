from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_log_leveled.adapters.formatter import (
    DEFAULT_TEMPLATE,
    DEFAULT_TIME_FORMAT,
    PLAIN_TEMPLATE,
    MessageFormatter,
    build_format_payload,
)
from lib_log_leveled.domain.errors import ConfigurationError


def test_default_template_renders_color_time_level_and_call_site(make_record) -> None:  # noqa: ANN001
    formatter = MessageFormatter()
    output = formatter.render(make_record(level=20, message="order stored"))
    assert output == b"\x1b[0;32m[2025-09-30 12:00:05]     INFO  handle_order orders.py 42 \x1b[0m order stored\n"


def test_level_name_is_right_aligned_to_eight_columns(make_record) -> None:  # noqa: ANN001
    formatter = MessageFormatter("{level_name:>8}|")
    assert formatter.render(make_record(level=40)) == b"   ERROR|\n"
    assert formatter.render(make_record(level=50)) == b"CRITICAL|\n"


def test_rendering_is_deterministic(make_record) -> None:  # noqa: ANN001
    formatter = MessageFormatter(DEFAULT_TEMPLATE, DEFAULT_TIME_FORMAT)
    record = make_record(level=30, message="disk at 91%")
    assert formatter.render(record) == formatter.render(record)


def test_colorize_false_renders_empty_color_fields(make_record) -> None:  # noqa: ANN001
    formatter = MessageFormatter(colorize=False)
    output = formatter.render(make_record(level=40))
    assert b"\x1b[" not in output
    assert output.startswith(b"[2025-09-30 12:00:05]    ERROR")


def test_plain_template_has_no_escape_sequences(make_record) -> None:  # noqa: ANN001
    output = MessageFormatter(PLAIN_TEMPLATE).render(make_record(level=50, message="halt"))
    assert output == b"[2025-09-30 12:00:05] CRITICAL  handle_order orders.py 42 halt\n"


def test_unknown_rank_renders_without_color_or_error(make_record) -> None:  # noqa: ANN001
    output = MessageFormatter("{color}{level_name}{color_clear}:{level}").render(make_record(level=33))
    assert output == b"LEVEL33:33\n"


def test_time_format_is_applied(make_record) -> None:  # noqa: ANN001
    formatter = MessageFormatter("{time}", "%H:%M")
    record = make_record(timestamp=datetime(2025, 1, 2, 7, 8, 9, tzinfo=timezone.utc))
    assert formatter.render(record) == b"07:08\n"


def test_non_ascii_messages_are_utf8_encoded(make_record) -> None:  # noqa: ANN001
    output = MessageFormatter("{message}").render(make_record(message="größe ✓"))
    assert output == "größe ✓\n".encode("utf-8")


def test_payload_exposes_every_placeholder(make_record) -> None:  # noqa: ANN001
    payload = build_format_payload(make_record(level=10), time_format="%Y")
    assert payload == {
        "color": "\x1b[0;34m",
        "time": "2025",
        "level_name": "DEBUG",
        "level": 10,
        "func_name": "handle_order",
        "file_name": "orders.py",
        "line": 42,
        "color_clear": "\x1b[0m",
        "message": "hello",
    }


@pytest.mark.parametrize(
    "template, match",
    [
        ("{unknown} {message}", "Unknown field"),
        ("{} {message}", "positional"),
        ("{0}", "positional"),
        ("{message", "Malformed"),
        ("message}", "Malformed"),
        ("{line:q}", "cannot be rendered"),
    ],
)
def test_invalid_templates_fail_at_construction(template: str, match: str) -> None:
    with pytest.raises(ConfigurationError, match=match):
        MessageFormatter(template)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        MessageFormatter("{nope}")


def test_unknown_encoding_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="encoding"):
        MessageFormatter(encoding="no-such-codec")
