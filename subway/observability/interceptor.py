from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass, field
from fnmatch import fnmatch
from time import perf_counter
from typing import Any, Callable, TypeVar

import structlog

from subway.config import get_settings
from subway.observability.context import bind_request_id, clear_request_id, new_request_id


F = TypeVar("F", bound=Callable[..., Any])

_TAG = "__request_logged__"


def _declaring_type(func: Callable[..., Any]) -> str:
    owner, _, _ = func.__qualname__.rpartition(".")
    if owner and "<locals>" not in owner:
        return f"{func.__module__}.{owner}"
    return func.__module__


def _error_kind(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _render(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__qualname__}>"


def _argument_values(signature: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Any, ...]:
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        # Let the handler itself raise for a bad call; log what was passed.
        return (*args, *kwargs.values())
    bound.apply_defaults()

    values: list[Any] = []
    for name, value in bound.arguments.items():
        if name in ("self", "cls"):
            continue
        kind = signature.parameters[name].kind
        if kind is inspect.Parameter.VAR_POSITIONAL:
            values.extend(value)
        elif kind is inspect.Parameter.VAR_KEYWORD:
            values.extend(value.values())
        else:
            values.append(value)
    return tuple(values)


@dataclass(frozen=True)
class Invocation:
    """A pending handler call: who is being called, with what, and how to run it."""

    declaring_type: str
    method_name: str
    args: tuple[Any, ...]
    proceed: Callable[[], Any]

    @classmethod
    def of(
        cls,
        func: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        signature: inspect.Signature | None = None,
    ) -> Invocation:
        signature = signature or inspect.signature(func)
        return cls(
            declaring_type=_declaring_type(func),
            method_name=func.__name__,
            args=_argument_values(signature, args, kwargs),
            proceed=functools.partial(func, *args, **kwargs),
        )


@dataclass
class InvocationRecord:
    declaring_type: str
    method_name: str
    args: tuple[Any, ...]
    request_id: str
    elapsed_ms: int = 0
    result: Any = None
    error_kind: str | None = None
    error_message: str | None = None
    _started: float = field(default=0.0, repr=False)


class RequestLoggingInterceptor:
    """Logs one handler invocation under a fresh request id.

    Emits a start line, the invoked method, one line per argument, then either the
    elapsed time plus response or the elapsed time plus error. Handler errors are
    logged and absorbed (the call returns ``None``) unless ``propagate_errors`` is set.
    The request id is unbound again before returning, whatever the outcome.
    """

    def __init__(self, *, propagate_errors: bool = False, logger_name: str = "request") -> None:
        self.propagate_errors = propagate_errors
        self.logger_name = logger_name

    def intercept(self, invocation: Invocation) -> Any:
        request_id = new_request_id()
        tokens = bind_request_id(request_id)
        try:
            record = self._start(invocation, request_id)
            try:
                result = invocation.proceed()
            except Exception as exc:
                self._fail(invocation, record, exc)
                if self.propagate_errors:
                    raise
                return None
            self._succeed(record, result)
            return result
        finally:
            clear_request_id(tokens)

    async def intercept_async(self, invocation: Invocation) -> Any:
        request_id = new_request_id()
        tokens = bind_request_id(request_id)
        try:
            record = self._start(invocation, request_id)
            try:
                result = await invocation.proceed()
            except Exception as exc:
                self._fail(invocation, record, exc)
                if self.propagate_errors:
                    raise
                return None
            self._succeed(record, result)
            return result
        finally:
            clear_request_id(tokens)

    def _start(self, invocation: Invocation, request_id: str) -> InvocationRecord:
        log = structlog.get_logger(self.logger_name)

        log.info(f"Requested Id {request_id} Start")
        log.info(f"Invoked Method: {invocation.declaring_type}::{invocation.method_name}")
        for index, value in enumerate(invocation.args):
            log.info(f"Requested Id: {request_id} / Arguments[{index}]: {_render(value)}")

        return InvocationRecord(
            declaring_type=invocation.declaring_type,
            method_name=invocation.method_name,
            args=invocation.args,
            request_id=request_id,
            _started=perf_counter(),
        )

    def _stop(self, record: InvocationRecord) -> None:
        record.elapsed_ms = int((perf_counter() - record._started) * 1000)

    def _succeed(self, record: InvocationRecord, result: Any) -> None:
        self._stop(record)
        record.result = result
        log = structlog.get_logger(self.logger_name)
        log.info(f"Requested Id {record.request_id} End (Time: {record.elapsed_ms}ms)")
        log.info(f"Response: {_render(result)}")

    def _fail(self, invocation: Invocation, record: InvocationRecord, exc: Exception) -> None:
        self._stop(record)
        record.error_kind = _error_kind(exc)
        record.error_message = _render(exc)
        log = structlog.get_logger(self.logger_name)
        log.error(f"Requested Id {record.request_id} Error (Time: {record.elapsed_ms}ms)")
        log.error(
            f"Invoked Method: {invocation.declaring_type}::{invocation.method_name}"
            f" / Occurred Error: {record.error_kind}.{record.error_message}"
        )


def _in_pointcut(func: Callable[..., Any]) -> bool:
    return any(fnmatch(func.__module__, pattern) for pattern in get_settings().request_log_pointcut)


def _interceptor() -> RequestLoggingInterceptor:
    return RequestLoggingInterceptor(propagate_errors=get_settings().request_log_propagate_errors)


def logged(func: F) -> F:
    """Tag a presentation-layer handler for request logging.

    Only handlers whose module matches ``REQUEST_LOG_POINTCUT`` are intercepted; the
    check happens per call so settings changes apply without re-importing.
    """

    signature = inspect.signature(func)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _in_pointcut(func):
                return await func(*args, **kwargs)
            invocation = Invocation.of(func, args, kwargs, signature=signature)
            return await _interceptor().intercept_async(invocation)

        wrapper: Callable[..., Any] = async_wrapper
    else:

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _in_pointcut(func):
                return func(*args, **kwargs)
            invocation = Invocation.of(func, args, kwargs, signature=signature)
            return _interceptor().intercept(invocation)

        wrapper = sync_wrapper

    setattr(wrapper, _TAG, True)
    return wrapper  # type: ignore[return-value]


def is_logged(func: Callable[..., Any]) -> bool:
    return bool(getattr(func, _TAG, False))
