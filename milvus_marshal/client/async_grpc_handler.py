import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Union

import grpc

from milvus_marshal.decorators import error_handler
from milvus_marshal.proto.milvus import MilvusServiceStub
from milvus_marshal.settings import Config

from . import decoder
from .abstract import IndexBuildProgress, IndexInfo, SearchResult
from .grpc_handler import CHANNEL_OPTIONS, get_address, index_build_timeout_message
from .polling import async_poll
from .prepare import Prepare
from .search_params import SearchParameters
from .types import IndexState, IndexType, MetricType
from .utils import check_status


class AsyncGrpcHandler:
    def __init__(
        self,
        uri: str = Config.MILVUS_URI,
        channel: Optional[grpc.aio.Channel] = None,
        db_name: Optional[str] = None,
    ) -> None:
        self._address = get_address(uri)
        self._db_name = db_name
        self._async_channel = channel
        self._setup_grpc_channel()

    def _setup_grpc_channel(self):
        if self._async_channel is None:
            self._async_channel = grpc.aio.insecure_channel(self._address, options=CHANNEL_OPTIONS)
        self._async_stub = MilvusServiceStub(self._async_channel)

    @property
    def server_address(self):
        return self._address

    @property
    def db_name(self) -> str:
        """Database of the index requests.

        A ``db_name`` given to the handler also overrides ``SearchParameters.db_name``,
        so searches and index operations go to the same database.
        """
        return Config.DEFAULT_DB_NAME if self._db_name is None else self._db_name

    async def close(self):
        if self._async_channel:
            await self._async_channel.close()
            self._async_channel = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @error_handler()
    async def search(
        self,
        params: SearchParameters,
        timeout: Optional[float] = None,
        graceful_time: Optional[int] = None,
    ) -> SearchResult:
        request = Prepare.search_request(
            params, graceful_time=graceful_time, db_name=self._db_name
        )
        response = await self._async_stub.Search(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_search_result(response)

    @error_handler()
    async def create_index(
        self,
        collection_name: str,
        field_name: str,
        index_type: Optional[IndexType] = None,
        metric_type: Optional[MetricType] = None,
        params: Optional[Dict] = None,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        request = Prepare.create_index_request(
            collection_name,
            field_name,
            index_type=index_type,
            metric_type=metric_type,
            params=params,
            index_name=index_name,
            db_name=self.db_name,
        )
        response = await self._async_stub.CreateIndex(request, timeout=timeout)
        check_status(response)

    @error_handler()
    async def describe_index(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> List[IndexInfo]:
        request = Prepare.describe_index_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = await self._async_stub.DescribeIndex(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_infos(response)

    @error_handler()
    async def drop_index(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        request = Prepare.drop_index_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = await self._async_stub.DropIndex(request, timeout=timeout)
        check_status(response)

    @error_handler()
    async def get_index_state(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> IndexState:
        request = Prepare.get_index_state_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = await self._async_stub.GetIndexState(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_state(response.state)

    @error_handler()
    async def get_index_build_progress(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> IndexBuildProgress:
        request = Prepare.get_index_build_progress_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = await self._async_stub.GetIndexBuildProgress(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_build_progress(response)

    async def wait_for_index_build(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        progress: Optional[Callable[[IndexBuildProgress], Union[None, Awaitable[None]]]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> IndexBuildProgress:
        async def probe():
            p = await self.get_index_build_progress(
                collection_name, field_name, index_name=index_name
            )
            return p.is_complete, p

        return await async_poll(
            probe,
            index_build_timeout_message(collection_name, index_name),
            interval=interval,
            timeout=timeout,
            progress=progress,
            cancel_event=cancel_event,
        )
