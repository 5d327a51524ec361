import time
from typing import Callable, Optional

from milvus_marshal.settings import Config

from .constants import EVENTUALLY_TS, LOGICAL_BITS
from .types import ConsistencyLevel
from .utils import mkts_from_unixtime


def get_eventually_ts():
    return EVENTUALLY_TS


def get_bounded_ts(graceful_time: int, clock: Callable[[], float] = time.time) -> int:
    """Hybrid timestamp of ``clock()`` minus ``graceful_time`` milliseconds"""
    now = mkts_from_unixtime(clock())
    return max(now - (graceful_time << LOGICAL_BITS), 0)


def get_guarantee_timestamp(
    consistency_level: Optional[ConsistencyLevel],
    guarantee_timestamp: int,
    graceful_time: Optional[int] = None,
    clock: Callable[[], float] = time.time,
) -> int:
    if consistency_level is None:
        return guarantee_timestamp

    if consistency_level == ConsistencyLevel.Strong:
        # Milvus will assign a newest ts.
        return 0
    if consistency_level == ConsistencyLevel.Bounded:
        if graceful_time is None:
            graceful_time = Config.GRACEFUL_TIME
        return get_bounded_ts(graceful_time, clock)
    if consistency_level == ConsistencyLevel.Eventually:
        return get_eventually_ts()

    # Session and Customized keep the caller's timestamp.
    return guarantee_timestamp
