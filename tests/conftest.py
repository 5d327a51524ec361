import logging
from unittest.mock import MagicMock

import grpc_testing
import pytest

# https://github.com/grpc/grpc/blob/5918f98ecbf5ace77f30fa97f7fc3e8bdac08e04/src/python/grpcio_tests/tests/testing/_client_test.py
from grpc.framework.foundation import logging_pool
from milvus_marshal.proto import milvus

logging.getLogger("milvus_marshal").setLevel(logging.DEBUG)

descriptor = milvus.SERVICE_DESCRIPTOR


@pytest.fixture(scope="function")
def channel(request):
    return grpc_testing.channel([descriptor], grpc_testing.strict_real_time())


@pytest.fixture(scope="function")
def client_thread(request):
    client_execution_thread_pool = logging_pool.pool(2)

    def teardown():
        client_execution_thread_pool.shutdown(wait=True)

    request.addfinalizer(teardown)
    return client_execution_thread_pool


def make_status(code=0, error_code=0, reason=""):
    """Create a mock status response."""
    status = MagicMock()
    status.code = code
    status.error_code = error_code
    status.reason = reason
    return status


def make_response(code=0, error_code=0, reason="", **kwargs):
    """Create a mock response with status and additional fields."""
    resp = MagicMock()
    resp.status.code = code
    resp.status.error_code = error_code
    resp.status.reason = reason
    for k, v in kwargs.items():
        setattr(resp, k, v)
    return resp
