from typing import Any

from milvus_marshal.exceptions import ExceptionsMessage, ParamError

from .constants import MAX_TOPK, MIN_TOPK
from .search_params import SearchParameters
from .types import IndexType, MetricType
from .utils import is_blank


def is_legal_name(name: Any) -> bool:
    return not is_blank(name)


def is_legal_top_k(top_k: Any) -> bool:
    return (
        isinstance(top_k, int)
        and not isinstance(top_k, bool)
        and MIN_TOPK <= top_k <= MAX_TOPK
    )


def is_legal_timestamp(ts: Any) -> bool:
    return isinstance(ts, int) and not isinstance(ts, bool) and ts >= 0


def is_legal_metric_type(metric_type: Any) -> bool:
    return isinstance(metric_type, MetricType) and metric_type != MetricType.INVALID


def is_legal_index_type(index_type: Any) -> bool:
    return isinstance(index_type, IndexType) and index_type != IndexType.INVALID


def check_collection_name(collection_name: Any):
    if not is_legal_name(collection_name):
        raise ParamError(message=ExceptionsMessage.CollectionNameBlank)


def check_field_name(field_name: Any):
    if not is_legal_name(field_name):
        raise ParamError(message=ExceptionsMessage.FieldNameBlank)


def check_db_name(db_name: Any):
    if not is_legal_name(db_name):
        raise ParamError(message=ExceptionsMessage.DatabaseNameBlank)


def _check_unique(values, message: str):
    seen = set()
    for v in values:
        if v in seen:
            raise ParamError(message=message % (v,))
        seen.add(v)


def check_search_params(params: SearchParameters):
    """Fails on the first violated invariant, each with its own message."""
    check_collection_name(params.collection_name)
    if not is_legal_name(params.vector_field_name):
        raise ParamError(message=ExceptionsMessage.VectorFieldNameBlank)
    if len(params.output_fields) == 0:
        raise ParamError(message=ExceptionsMessage.OutputFieldsEmpty)
    _check_unique(params.output_fields, ExceptionsMessage.DuplicateOutputField)
    _check_unique(params.partition_names, ExceptionsMessage.DuplicatePartition)
    if not is_legal_timestamp(params.guarantee_timestamp):
        raise ParamError(
            message=ExceptionsMessage.GuaranteeTimestampNegative % (params.guarantee_timestamp,)
        )
    if not is_legal_timestamp(params.travel_timestamp):
        raise ParamError(
            message=ExceptionsMessage.TravelTimestampNegative % (params.travel_timestamp,)
        )
    if not is_legal_metric_type(params.metric_type):
        raise ParamError(message=ExceptionsMessage.MetricTypeInvalid)
    if params.vectors is None:
        raise ParamError(message=ExceptionsMessage.VectorsAbsent)
    if len(params.vectors) == 0:
        raise ParamError(message=ExceptionsMessage.VectorsEmpty)
    check_db_name(params.db_name)
    if not is_legal_top_k(params.top_k):
        raise ParamError(message=ExceptionsMessage.TopKRange % (MAX_TOPK, params.top_k))
    if params.expr is not None and is_blank(params.expr):
        raise ParamError(message=ExceptionsMessage.ExprBlank)
    for key in params.params:
        if is_blank(key):
            raise ParamError(message=ExceptionsMessage.ParamKeyBlank)
