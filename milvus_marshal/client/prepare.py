import dataclasses
import time
from typing import Any, Callable, Dict, Optional

from milvus_marshal.exceptions import ExceptionsMessage, ParamError
from milvus_marshal.proto import common as common_types
from milvus_marshal.proto import milvus as milvus_types
from milvus_marshal.settings import Config

from . import blob, check, ts_utils, utils
from .constants import (
    ANNS_FIELD,
    IGNORE_GROWING,
    INDEX_TYPE,
    METRIC_TYPE,
    PARAMS,
    ROUND_DECIMAL,
    TOPK,
)
from .search_params import SearchParameters
from .types import IndexType, MetricType


def _kv(key: str, value: Any):
    return common_types.KeyValuePair(key=key, value=utils.dumps(value))


class Prepare:
    @classmethod
    def search_request(
        cls,
        params: SearchParameters,
        graceful_time: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        db_name: Optional[str] = None,
    ):
        if db_name is not None:
            params = dataclasses.replace(params, db_name=db_name)
        check.check_search_params(params)

        use_default_consistency = params.consistency_level is None
        guarantee_ts = ts_utils.get_guarantee_timestamp(
            params.consistency_level,
            params.guarantee_timestamp,
            graceful_time=graceful_time,
            clock=clock,
        )
        pl_group = blob.placeholder_group(params.vectors)

        request = milvus_types.SearchRequest(
            db_name=params.db_name,
            collection_name=params.collection_name,
            partition_names=params.partition_names,
            output_fields=params.output_fields,
            travel_timestamp=params.travel_timestamp,
            guarantee_timestamp=guarantee_ts,
            use_default_consistency=use_default_consistency,
            nq=params.nq,
            placeholder_group=pl_group.SerializeToString(),
            dsl_type=common_types.DslType.Value("BoolExprV1"),
            search_params=cls.search_params_pairs(params),
        )
        if not use_default_consistency:
            request.consistency_level = int(params.consistency_level)
        if params.expr is not None:
            request.dsl = params.expr
        return request

    @classmethod
    def search_params_pairs(cls, params: SearchParameters):
        """search_params in the order the server expects them"""
        return [
            _kv(ANNS_FIELD, params.vector_field_name),
            _kv(TOPK, params.top_k),
            _kv(METRIC_TYPE, str(params.metric_type)),
            _kv(IGNORE_GROWING, params.ignore_growing),
            _kv(ROUND_DECIMAL, params.round_decimal),
            _kv(PARAMS, dict(params.params)),
        ]

    @classmethod
    def create_index_request(
        cls,
        collection_name: str,
        field_name: str,
        index_type: Optional[IndexType] = None,
        metric_type: Optional[MetricType] = None,
        params: Optional[Dict] = None,
        index_name: Optional[str] = None,
        db_name: str = Config.DEFAULT_DB_NAME,
    ):
        check.check_collection_name(collection_name)
        check.check_field_name(field_name)

        request = milvus_types.CreateIndexRequest(
            db_name=db_name,
            collection_name=collection_name,
            field_name=field_name,
            index_name=index_name or Config.IndexName,
        )

        if metric_type is not None:
            if not check.is_legal_metric_type(metric_type):
                raise ParamError(message=ExceptionsMessage.MetricTypeInvalid)
            request.extra_params.append(_kv(METRIC_TYPE, str(metric_type)))

        if index_type is not None:
            if not check.is_legal_index_type(index_type):
                raise ParamError(message=ExceptionsMessage.IndexTypeInvalid)
            request.extra_params.append(_kv(INDEX_TYPE, str(index_type)))

        if params is not None:
            request.extra_params.append(_kv(PARAMS, dict(params)))

        return request

    @classmethod
    def describe_index_request(
        cls,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        db_name: str = Config.DEFAULT_DB_NAME,
        timestamp: int = 0,
    ):
        check.check_collection_name(collection_name)
        check.check_field_name(field_name)
        return milvus_types.DescribeIndexRequest(
            db_name=db_name,
            collection_name=collection_name,
            field_name=field_name,
            index_name=index_name or Config.IndexName,
            timestamp=timestamp,
        )

    @classmethod
    def drop_index_request(
        cls,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        db_name: str = Config.DEFAULT_DB_NAME,
    ):
        check.check_collection_name(collection_name)
        check.check_field_name(field_name)
        return milvus_types.DropIndexRequest(
            db_name=db_name,
            collection_name=collection_name,
            field_name=field_name,
            index_name=index_name or Config.IndexName,
        )

    @classmethod
    def get_index_state_request(
        cls,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        db_name: str = Config.DEFAULT_DB_NAME,
    ):
        check.check_collection_name(collection_name)
        check.check_field_name(field_name)
        return milvus_types.GetIndexStateRequest(
            db_name=db_name,
            collection_name=collection_name,
            field_name=field_name,
            index_name=index_name or Config.IndexName,
        )

    @classmethod
    def get_index_build_progress_request(
        cls,
        collection_name: str,
        field_name: str,
        index_name: Optional[str] = None,
        db_name: str = Config.DEFAULT_DB_NAME,
    ):
        check.check_collection_name(collection_name)
        check.check_field_name(field_name)
        return milvus_types.GetIndexBuildProgressRequest(
            db_name=db_name,
            collection_name=collection_name,
            field_name=field_name,
            index_name=index_name or Config.IndexName,
        )
