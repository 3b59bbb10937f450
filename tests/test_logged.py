import inspect

import pytest

from subway.observability.context import current_request_id
from subway.observability.interceptor import is_logged, logged


@logged
def find_station(station_id: int, detail: bool = False) -> dict:
    return {"id": station_id, "detail": detail}


@logged
async def find_line(line_id: int) -> dict:
    return {"id": line_id}


@logged
def broken_handler() -> None:
    raise LookupError("missing station")


def untagged(value: int) -> int:
    return value


@pytest.fixture
def in_pointcut(configure_env) -> None:
    # Test modules sit outside the default presentation-layer namespace.
    configure_env(REQUEST_LOG_POINTCUT=f'["{__name__}"]')


def test_tag_preserves_name_and_signature() -> None:
    assert is_logged(find_station)
    assert is_logged(find_line)
    assert not is_logged(untagged)
    assert find_station.__name__ == "find_station"
    assert list(inspect.signature(find_station).parameters) == ["station_id", "detail"]
    assert inspect.iscoroutinefunction(find_line)
    assert not inspect.iscoroutinefunction(find_station)


def test_handlers_outside_pointcut_run_without_logging(log_events) -> None:
    assert find_station(1) == {"id": 1, "detail": False}
    assert log_events == []


def test_handlers_outside_pointcut_keep_their_errors(log_events) -> None:
    with pytest.raises(LookupError):
        broken_handler()
    assert log_events == []


def test_tagged_handler_in_pointcut_is_logged(in_pointcut, log_events) -> None:
    assert find_station(4, detail=True) == {"id": 4, "detail": True}

    events = [e["event"] for e in log_events]
    assert events[1] == f"Invoked Method: {__name__}::find_station"
    assert events[2].endswith("Arguments[0]: 4")
    assert events[3].endswith("Arguments[1]: True")
    assert events[-1] == "Response: {'id': 4, 'detail': True}"
    assert len({e["request_id"] for e in log_events}) == 1
    assert current_request_id() is None


async def test_tagged_async_handler_in_pointcut_is_logged(in_pointcut, log_events) -> None:
    assert await find_line(2) == {"id": 2}

    assert log_events[-1]["event"] == "Response: {'id': 2}"
    assert current_request_id() is None


def test_glob_patterns_select_the_namespace(configure_env, log_events) -> None:
    configure_env(REQUEST_LOG_POINTCUT='["tests.*", "test_*"]')

    find_station(1)

    assert log_events


def test_errors_are_absorbed_by_default(in_pointcut, log_events) -> None:
    assert broken_handler() is None

    assert log_events[-1]["log_level"] == "error"
    assert log_events[-1]["event"].endswith("Occurred Error: LookupError.missing station")


def test_errors_propagate_when_configured(in_pointcut, configure_env, log_events) -> None:
    configure_env(REQUEST_LOG_PROPAGATE_ERRORS="true")

    with pytest.raises(LookupError, match="missing station"):
        broken_handler()

    assert log_events[-1]["log_level"] == "error"
    assert current_request_id() is None
