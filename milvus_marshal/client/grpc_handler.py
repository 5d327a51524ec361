import threading
from typing import Callable, Dict, List, Optional
from urllib import parse

import grpc

from milvus_marshal.decorators import error_handler
from milvus_marshal.exceptions import ExceptionsMessage, ParamError
from milvus_marshal.proto.milvus import MilvusServiceStub
from milvus_marshal.settings import Config

from . import decoder
from .abstract import IndexBuildProgress, IndexInfo, SearchResult
from .polling import poll
from .prepare import Prepare
from .search_params import SearchParameters
from .types import IndexState, IndexType, MetricType
from .utils import check_status

CHANNEL_OPTIONS = [
    ("grpc.max_send_message_length", -1),
    ("grpc.max_receive_message_length", -1),
    ("grpc.keepalive_time_ms", 55000),
]


def get_address(uri: str) -> str:
    if "://" not in uri:
        return uri
    try:
        parsed_uri = parse.urlparse(uri)
    except ValueError as e:
        raise ParamError(message=f"Illegal uri: [{uri}], {e}") from e
    return parsed_uri.netloc


def index_build_timeout_message(collection_name: str, index_name: Optional[str]) -> str:
    if index_name:
        return ExceptionsMessage.IndexBuildTimeout % (index_name, collection_name)
    return ExceptionsMessage.UnnamedIndexBuildTimeout % collection_name


class GrpcHandler:
    def __init__(
        self,
        uri: str = Config.MILVUS_URI,
        channel: Optional[grpc.Channel] = None,
        db_name: Optional[str] = None,
    ) -> None:
        self._address = get_address(uri)
        self._db_name = db_name
        self._channel = channel
        self._setup_grpc_channel()

    def _setup_grpc_channel(self):
        if self._channel is None:
            self._channel = grpc.insecure_channel(self._address, options=CHANNEL_OPTIONS)
        self._stub = MilvusServiceStub(self._channel)

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

    def close(self):
        if self._channel:
            self._channel.close()
            self._channel = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @error_handler()
    def search(
        self,
        params: SearchParameters,
        timeout: Optional[float] = None,
        graceful_time: Optional[int] = None,
    ) -> SearchResult:
        request = Prepare.search_request(
            params, graceful_time=graceful_time, db_name=self._db_name
        )
        response = self._stub.Search(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_search_result(response)

    @error_handler()
    def create_index(
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
        response = self._stub.CreateIndex(request, timeout=timeout)
        check_status(response)

    @error_handler()
    def describe_index(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> List[IndexInfo]:
        request = Prepare.describe_index_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = self._stub.DescribeIndex(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_infos(response)

    @error_handler()
    def drop_index(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        request = Prepare.drop_index_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = self._stub.DropIndex(request, timeout=timeout)
        check_status(response)

    @error_handler()
    def get_index_state(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> IndexState:
        request = Prepare.get_index_state_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = self._stub.GetIndexState(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_state(response.state)

    @error_handler()
    def get_index_build_progress(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> IndexBuildProgress:
        request = Prepare.get_index_build_progress_request(
            collection_name, field_name, index_name=index_name, db_name=self.db_name
        )
        response = self._stub.GetIndexBuildProgress(request, timeout=timeout)
        check_status(response.status)
        return decoder.to_index_build_progress(response)

    def wait_for_index_build(
        self,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        progress: Optional[Callable[[IndexBuildProgress], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> IndexBuildProgress:
        """Block until every row of the index is built.

        ``timeout`` bounds the whole wait, each probe is a plain
        GetIndexBuildProgress call without a deadline of its own.
        """

        def probe():
            p = self.get_index_build_progress(collection_name, field_name, index_name=index_name)
            return p.is_complete, p

        return poll(
            probe,
            index_build_timeout_message(collection_name, index_name),
            interval=interval,
            timeout=timeout,
            progress=progress,
            cancel_event=cancel_event,
        )
