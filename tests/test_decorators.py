import logging

import grpc
import pytest
from milvus_marshal.decorators import error_handler
from milvus_marshal.exceptions import MilvusException, ParamError


class FakeRpcError(grpc.RpcError):
    def code(self):
        return grpc.StatusCode.UNAVAILABLE

    def details(self):
        return "unavailable"


class TestErrorHandler:
    @pytest.fixture(autouse=True)
    def propagate_logs(self, monkeypatch):
        # the package logger does not propagate, caplog listens on the root logger
        monkeypatch.setattr(logging.getLogger("milvus_marshal"), "propagate", True)

    def test_passes_result(self):
        @error_handler()
        def ok():
            return 1

        assert ok() == 1

    @pytest.mark.parametrize("error", [ParamError(message="bad"), FakeRpcError()])
    def test_reraises_unchanged(self, error, caplog):
        @error_handler(func_name="op")
        def fail():
            raise error

        with caplog.at_level(logging.ERROR, logger="milvus_marshal"):
            with pytest.raises(type(error)) as e:
                fail()
        assert e.value is error
        assert "[op]" in caplog.text

    def test_wraps_unexpected(self):
        @error_handler()
        def fail():
            raise KeyError("k")

        with pytest.raises(MilvusException, match="Unexpected error"):
            fail()

    @pytest.mark.asyncio
    async def test_coroutine(self, caplog):
        @error_handler()
        async def fail():
            raise ParamError(message="bad")

        with caplog.at_level(logging.ERROR, logger="milvus_marshal"):
            with pytest.raises(ParamError):
                await fail()
        assert "RPC error: [fail]" in caplog.text
