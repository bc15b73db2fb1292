from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO

import pytest

from lib_log_leveled import config as log_config
from lib_log_leveled.domain.records import MessageRecord

FIXED_TIME = datetime(2025, 9, 30, 12, 0, 5, tzinfo=timezone.utc)

_LOG_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_STREAM_ENABLED",
    "LOG_STREAM_LEVEL",
    "LOG_STREAM_TEMPLATE",
    "LOG_FILE",
    "LOG_FILE_LEVEL",
    "LOG_FILE_TEMPLATE",
    "LOG_TIME_FORMAT",
    "LOG_COLOR",
    log_config.DOTENV_ENV_VAR,
)


class FixedClock:
    def __init__(self, moment: datetime = FIXED_TIME) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


class SpyDestination(BytesIO):
    """Binary sink remembering every individual write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[bytes] = []

    def write(self, data) -> int:  # noqa: ANN001
        self.writes.append(bytes(data))
        return super().write(data)

    def lines(self) -> list[str]:
        return self.getvalue().decode("utf-8").splitlines()


class FailingDestination:
    """Sink whose writes always fail like a broken pipe."""

    def __init__(self) -> None:
        self.attempts = 0

    def write(self, data) -> int:  # noqa: ANN001, ARG002
        self.attempts += 1
        raise BrokenPipeError("pipe closed")

    def flush(self) -> None:
        return None


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    log_config._reset_dotenv_state_for_testing()
    yield
    log_config._reset_dotenv_state_for_testing()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def spy() -> SpyDestination:
    return SpyDestination()


@pytest.fixture
def spy_factory():
    def _make() -> SpyDestination:
        return SpyDestination()

    return _make


@pytest.fixture
def failing_destination() -> FailingDestination:
    return FailingDestination()


@pytest.fixture
def make_record():
    def _make(level: int = 20, message: str = "hello", **changes) -> MessageRecord:  # noqa: ANN003
        values = {
            "level": level,
            "message": message,
            "func_name": "handle_order",
            "file_name": "orders.py",
            "line": 42,
            "timestamp": FIXED_TIME,
        }
        values.update(changes)
        return MessageRecord(**values)

    return _make
