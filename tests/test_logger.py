"""Behaviour of the Logger façade across levels, filters, handlers, and failures."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from lib_log_leveled import (
    ConfigurationError,
    FileMessageHandler,
    Logger,
    LogLevel,
    MessageFormatter,
    StreamMessageHandler,
    get_default_logger,
)

SHORT = MessageFormatter("{level_name}:{message}")


def _stream(destination, level: LogLevel | int = LogLevel.DEBUG, **kwargs) -> StreamMessageHandler:  # noqa: ANN001, ANN003
    return StreamMessageHandler(destination, level=level, formatter=SHORT, **kwargs)


@pytest.mark.parametrize("logger_level", [LogLevel.INFO, LogLevel.WARNING, LogLevel.CRITICAL])
def test_calls_below_logger_level_produce_no_output(spy, fixed_clock, logger_level: LogLevel) -> None:  # noqa: ANN001
    logger = Logger(level=logger_level, handlers=[_stream(spy)], clock=fixed_clock)
    for level in LogLevel:
        if level < logger_level:
            logger.log(level, "suppressed")
    assert spy.writes == []


def test_logger_gate_skips_record_construction(spy, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ANN001
    import lib_log_leveled.logger as logger_module

    built: list[int] = []
    original = logger_module.build_record

    def counting_build(*args, **kwargs):  # noqa: ANN002, ANN003, ANN202
        built.append(args[0])
        return original(*args, **kwargs)

    monkeypatch.setattr(logger_module, "build_record", counting_build)
    logger = Logger(level="ERROR", handlers=[_stream(spy)])
    logger.warning("skipped")
    logger.error("kept")
    assert built == [LogLevel.ERROR]


def test_handler_level_gates_independently(spy_factory, fixed_clock) -> None:  # noqa: ANN001
    quiet, loud = spy_factory(), spy_factory()
    logger = Logger(level=LogLevel.DEBUG, handlers=[_stream(quiet, LogLevel.ERROR), _stream(loud)], clock=fixed_clock)

    logger.info("routine")

    assert quiet.writes == []
    assert loud.lines() == ["INFO:routine"]


def test_info_reaches_stream_only_and_error_reaches_both(spy, tmp_path: Path, fixed_clock) -> None:  # noqa: ANN001
    log_file = tmp_path / "app.log"
    logger = Logger(
        level=LogLevel.INFO,
        handlers=[
            _stream(spy, LogLevel.DEBUG),
            FileMessageHandler(log_file, level=LogLevel.WARNING, formatter=SHORT),
        ],
        clock=fixed_clock,
    )

    logger.info("started")
    assert spy.lines() == ["INFO:started"]
    assert log_file.read_text() == ""

    logger.error("crashed")
    assert spy.lines() == ["INFO:started", "ERROR:crashed"]
    assert log_file.read_text() == "ERROR:crashed\n"
    logger.close()


def test_logger_filter_false_suppresses_every_handler(spy_factory) -> None:  # noqa: ANN001
    first, second = spy_factory(), spy_factory()
    logger = Logger(filter=lambda logger, record: False, handlers=[_stream(first), _stream(second)])

    logger.critical("never shown")

    assert first.writes == second.writes == []


def test_handler_filter_false_suppresses_only_that_handler(spy_factory) -> None:  # noqa: ANN001
    filtered, open_sink = spy_factory(), spy_factory()
    logger = Logger(
        handlers=[
            _stream(filtered, filter=lambda logger, record: "secret" not in record.message),
            _stream(open_sink),
        ]
    )

    logger.info("secret token rotated")

    assert filtered.writes == []
    assert open_sink.lines() == ["INFO:secret token rotated"]


def test_filter_sees_logger_state_and_record(spy) -> None:  # noqa: ANN001
    seen: list[tuple[int, str]] = []

    def remember(logger: Logger, record) -> bool:  # noqa: ANN001
        seen.append((logger.level, record.message))
        return True

    logger = Logger(level=LogLevel.INFO, filter=remember, handlers=[_stream(spy)])
    logger.warning("%s percent", 90)
    assert seen == [(LogLevel.INFO, "90 percent")]


def test_write_failure_does_not_stop_second_handler(failing_destination, spy) -> None:  # noqa: ANN001
    events: list[str] = []
    logger = Logger(
        handlers=[_stream(failing_destination, name="broken"), _stream(spy)],
        diagnostic_hook=lambda name, payload: events.append(name),
    )

    logger.error("still delivered")

    assert failing_destination.attempts == 1
    assert spy.lines() == ["ERROR:still delivered"]
    assert logger.error_count == 1
    assert isinstance(logger.last_error, OSError)
    assert events == ["handler_failed"]


def test_write_failure_never_raises_to_caller(failing_destination) -> None:  # noqa: ANN001
    logger = Logger(handlers=[_stream(failing_destination)])
    assert logger.info("fire and forget") is None
    logger.reset_errors()
    assert logger.error_count == 0
    assert logger.last_error is None


def test_stream_handlers_dispatch_before_file_handlers(tmp_path: Path, spy) -> None:  # noqa: ANN001
    order: list[str] = []
    file_handler = FileMessageHandler(
        tmp_path / "app.log",
        formatter=SHORT,
        filter=lambda logger, record: order.append("file") or True,
    )
    stream_handler = _stream(spy, filter=lambda logger, record: order.append("stream") or True)
    logger = Logger(handlers=[file_handler, stream_handler])

    logger.info("ordered")

    assert [type(handler) for handler in logger.handlers] == [StreamMessageHandler, FileMessageHandler]
    assert order == ["stream", "file"]
    logger.close()


def test_handlers_must_not_share_a_destination(spy) -> None:  # noqa: ANN001
    logger = Logger(handlers=[_stream(spy)])
    with pytest.raises(ConfigurationError, match="shares its destination"):
        logger.add_handler(_stream(spy))


def test_same_handler_cannot_be_attached_twice(spy) -> None:  # noqa: ANN001
    handler = _stream(spy)
    logger = Logger(handlers=[handler])
    with pytest.raises(ConfigurationError, match="already attached"):
        logger.add_handler(handler)


def test_remove_handler_stops_delivery(spy) -> None:  # noqa: ANN001
    handler = _stream(spy)
    logger = Logger(handlers=[handler])
    logger.remove_handler(handler)
    logger.info("nobody listens")
    assert spy.writes == []
    assert logger.handlers == ()


def test_logger_without_handlers_is_a_no_op() -> None:
    Logger().critical("into the void")


def test_custom_ranks_pass_through_gates(spy) -> None:  # noqa: ANN001
    logger = Logger(level=25, handlers=[_stream(spy, 35)])
    logger.log(30, "between warning levels")
    logger.log(45, "between error levels")
    logger.log("critical", "by name")
    assert spy.lines() == ["LEVEL45:between error levels", "CRITICAL:by name"]


def test_level_setter_and_is_enabled_for(spy) -> None:  # noqa: ANN001
    logger = Logger(handlers=[_stream(spy)])
    logger.level = "warning"
    assert logger.is_enabled_for(LogLevel.ERROR)
    assert not logger.is_enabled_for("info")
    logger.info("hidden")
    assert spy.writes == []


def test_independent_loggers_keep_independent_configuration(spy_factory) -> None:  # noqa: ANN001
    first_sink, second_sink = spy_factory(), spy_factory()
    verbose = Logger(level=LogLevel.DEBUG, handlers=[_stream(first_sink)])
    terse = Logger(level=LogLevel.ERROR, handlers=[_stream(second_sink)])

    verbose.debug("detail")
    terse.debug("detail")

    assert first_sink.lines() == ["DEBUG:detail"]
    assert second_sink.writes == []


def test_concurrent_calls_keep_records_separate(spy) -> None:  # noqa: ANN001
    logger = Logger(handlers=[_stream(spy)])

    def worker(index: int) -> None:
        for step in range(50):
            logger.info("worker-%d step-%d", index, step)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    lines = spy.lines()
    assert len(lines) == 200
    assert sorted(lines) == sorted(f"INFO:worker-{index} step-{step}" for index in range(4) for step in range(50))


def test_default_logger_writes_colored_lines_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_default_logger()
    assert logger.level == LogLevel.DEBUG
    (handler,) = logger.handlers
    assert isinstance(handler, StreamMessageHandler)
    assert handler.level == LogLevel.DEBUG

    logger.debug("booting %s", "api")

    out = capsys.readouterr().out
    assert out.startswith("\x1b[0;34m[")
    assert "   DEBUG  test_default_logger_writes_colored_lines_to_stdout test_logger.py " in out
    assert out.endswith("\x1b[0m booting api\n")
