import datetime
import functools
import inspect
import logging
from typing import Callable

import grpc

from .exceptions import MilvusException

LOGGER = logging.getLogger(__name__)


def _log_failure(inner_name: str, e: Exception, record_dict: dict):
    if isinstance(e, MilvusException):
        record_dict["RPC error"] = str(datetime.datetime.now())
        LOGGER.error(f"RPC error: [{inner_name}], {e}, <Time:{record_dict}>")
    elif isinstance(e, grpc.RpcError):
        record_dict["gRPC error"] = str(datetime.datetime.now())
        LOGGER.error(
            f"grpc RpcError: [{inner_name}], <{e.__class__.__name__}: "
            f"{e.code()}, {e.details()}>, <Time:{record_dict}>"
        )
    else:
        record_dict["Exception"] = str(datetime.datetime.now())
        LOGGER.error(f"Unexpected error: [{inner_name}], {e}, <Time: {record_dict}>")


def _reraise(e: Exception):
    if isinstance(e, (MilvusException, grpc.RpcError)):
        raise e from e
    raise MilvusException(message=f"Unexpected error, message=<{e!s}>") from e


def error_handler(func_name: str = ""):
    """Log failures of the wrapped call at ERROR and re-raise them.

    MilvusException and grpc.RpcError pass through unchanged, anything else is
    wrapped in a MilvusException. Coroutine functions are supported.
    """

    def wrapper(func: Callable):
        inner_name = func_name or func.__name__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_handler(*args, **kwargs):
                record_dict = {"RPC start": str(datetime.datetime.now())}
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log_failure(inner_name, e, record_dict)
                    _reraise(e)

            return async_handler

        @functools.wraps(func)
        def handler(*args, **kwargs):
            record_dict = {"RPC start": str(datetime.datetime.now())}
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(inner_name, e, record_dict)
                _reraise(e)

        return handler

    return wrapper
