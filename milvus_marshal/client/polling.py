"""Poll a probe until it reports completion, with timeout, cancellation and progress.

A probe returns ``(done, value)``. While ``done`` is false the value is handed
to ``progress`` and the loop waits ``interval`` seconds before probing again;
once ``done`` is true the value is returned and not reported as progress.
"""

import asyncio
import inspect
import logging
import threading
import time
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from milvus_marshal.exceptions import (
    ExceptionsMessage,
    ParamError,
    WaitCancelledError,
    WaitTimeoutError,
)
from milvus_marshal.settings import Config

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_interval(interval: Optional[float]) -> float:
    if interval is None:
        interval = Config.WAIT_INTERVAL
    if not isinstance(interval, (int, float)) or interval <= 0:
        raise ParamError(message=ExceptionsMessage.IntervalInvalid % (interval,))
    return interval


def _next_wait(interval: float, timeout: Optional[float], elapsed: float) -> float:
    if timeout is None:
        return interval
    return max(min(interval, timeout - elapsed), 0)


def _timed_out(timeout: Optional[float], elapsed: float) -> bool:
    return timeout is not None and elapsed >= timeout


def poll(
    probe: Callable[[], Tuple[bool, T]],
    failure_message: str,
    interval: Optional[float] = None,
    timeout: Optional[float] = None,
    progress: Optional[Callable[[T], Any]] = None,
    cancel_event: Optional[threading.Event] = None,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    interval = _check_interval(interval)
    start = clock()
    attempt = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelledError(message=ExceptionsMessage.WaitCancelled)

        attempt += 1
        done, value = probe()
        if done:
            return value

        logger.debug(f"poll #{attempt} not done yet: {value}")
        if progress is not None:
            progress(value)

        elapsed = clock() - start
        if _timed_out(timeout, elapsed):
            raise WaitTimeoutError(message=failure_message)

        wait = _next_wait(interval, timeout, elapsed)
        if cancel_event is None:
            time.sleep(wait)
        elif cancel_event.wait(wait):
            raise WaitCancelledError(message=ExceptionsMessage.WaitCancelled)


async def async_poll(
    probe: Callable[[], Awaitable[Tuple[bool, T]]],
    failure_message: str,
    interval: Optional[float] = None,
    timeout: Optional[float] = None,
    progress: Optional[Callable[[T], Any]] = None,
    cancel_event: Optional[asyncio.Event] = None,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Coroutine version of ``poll``.

    The probe is awaited, ``progress`` may be a plain function or a coroutine
    function. Cancelling the surrounding task raises ``asyncio.CancelledError``
    as usual; ``cancel_event`` is the cooperative alternative and raises
    ``WaitCancelledError``.
    """
    interval = _check_interval(interval)
    start = clock()
    attempt = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelledError(message=ExceptionsMessage.WaitCancelled)

        attempt += 1
        done, value = await probe()
        if done:
            return value

        logger.debug(f"poll #{attempt} not done yet: {value}")
        if progress is not None:
            reported = progress(value)
            if inspect.isawaitable(reported):
                await reported

        elapsed = clock() - start
        if _timed_out(timeout, elapsed):
            raise WaitTimeoutError(message=failure_message)

        wait = _next_wait(interval, timeout, elapsed)
        if cancel_event is None:
            await asyncio.sleep(wait)
            continue
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=wait)
        except asyncio.TimeoutError:
            continue
        raise WaitCancelledError(message=ExceptionsMessage.WaitCancelled)
