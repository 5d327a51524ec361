import datetime
from datetime import timedelta
from typing import Optional, Union

import ujson

from milvus_marshal.exceptions import MilvusException

from .constants import LOGICAL_BITS


def check_status(status):
    if status.code != 0 or status.error_code != 0:
        raise MilvusException(status.code or status.error_code, status.reason)


def is_successful(status):
    return status.code == 0 and status.error_code == 0


def hybridts_to_unixtime(ts: int):
    physical = ts >> LOGICAL_BITS
    return physical / 1000.0


def hybridts_to_datetime(ts: int) -> datetime.datetime:
    """Physical part of a hybrid timestamp as a timezone-aware UTC datetime"""
    physical = ts >> LOGICAL_BITS
    epoch = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
    return epoch + timedelta(milliseconds=physical)


def mkts_from_unixtime(
    epoch: Union[float],
    milliseconds: Union[float] = 0.0,
    delta: Optional[timedelta] = None,
) -> int:
    if not isinstance(epoch, (int, float)):
        raise MilvusException(message="parameter epoch should be type of int or float")

    if not isinstance(milliseconds, (int, float)):
        raise MilvusException(message="parameter milliseconds should be type of int or float")

    if isinstance(delta, datetime.timedelta):
        milliseconds += delta / timedelta(milliseconds=1)
    elif delta is not None:
        raise MilvusException(message="parameter delta should be type of datetime.timedelta")

    int_msecs = int(round(epoch * 1000 + milliseconds))
    return int(int_msecs << LOGICAL_BITS)


def dumps(v: Union[dict, str]) -> str:
    return ujson.dumps(v) if isinstance(v, dict) else str(v)


def is_blank(v: Optional[str]) -> bool:
    return v is None or not isinstance(v, str) or v.strip() == ""
