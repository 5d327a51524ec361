"""Subset of ``milvus.proto.milvus`` and the MilvusService stub used by this package."""

from google.protobuf import message_factory

from . import common, schema
from ._builder import (
    BOOL,
    BYTES,
    ENUM,
    INT64,
    MESSAGE,
    STRING,
    UINT32,
    UINT64,
    add_message,
    add_service,
    field,
    message_class,
    new_file,
    register,
)

PACKAGE = "milvus.proto.milvus"

_STATUS = f".{common.PACKAGE}.Status"
_KV = f".{common.PACKAGE}.KeyValuePair"

_file = new_file("milvus.proto", PACKAGE, [common.DESCRIPTOR.name, schema.DESCRIPTOR.name])


def _index_target(name):
    add_message(
        _file,
        name,
        [
            field("db_name", 2, STRING),
            field("collection_name", 3, STRING),
            field("field_name", 4, STRING),
            field("index_name", 5, STRING),
        ],
    )


add_message(
    _file,
    "SearchRequest",
    [
        field("db_name", 2, STRING),
        field("collection_name", 3, STRING),
        field("partition_names", 4, STRING, repeated=True),
        field("dsl", 5, STRING),
        field("placeholder_group", 6, BYTES),
        field("dsl_type", 7, ENUM, type_name=f".{common.PACKAGE}.DslType"),
        field("output_fields", 8, STRING, repeated=True),
        field("search_params", 9, MESSAGE, repeated=True, type_name=_KV),
        field("travel_timestamp", 10, UINT64),
        field("guarantee_timestamp", 11, UINT64),
        field("nq", 12, INT64),
        field("not_return_all_meta", 13, BOOL),
        field("consistency_level", 14, ENUM, type_name=f".{common.PACKAGE}.ConsistencyLevel"),
        field("use_default_consistency", 15, BOOL),
    ],
)
add_message(
    _file,
    "SearchResults",
    [
        field("status", 1, MESSAGE, type_name=_STATUS),
        field("results", 2, MESSAGE, type_name=f".{schema.PACKAGE}.SearchResultData"),
        field("collection_name", 3, STRING),
    ],
)
add_message(
    _file,
    "MutationResult",
    [
        field("status", 1, MESSAGE, type_name=_STATUS),
        field("IDs", 2, MESSAGE, type_name=f".{schema.PACKAGE}.IDs"),
        field("succ_index", 3, UINT32, repeated=True),
        field("err_index", 4, UINT32, repeated=True),
        field("acknowledged", 5, BOOL),
        field("insert_cnt", 6, INT64),
        field("delete_cnt", 7, INT64),
        field("upsert_cnt", 8, INT64),
        field("timestamp", 9, UINT64),
    ],
)
add_message(
    _file,
    "CreateIndexRequest",
    [
        field("db_name", 2, STRING),
        field("collection_name", 3, STRING),
        field("field_name", 4, STRING),
        field("extra_params", 5, MESSAGE, repeated=True, type_name=_KV),
        field("index_name", 6, STRING),
    ],
)
add_message(
    _file,
    "DescribeIndexRequest",
    [
        field("db_name", 2, STRING),
        field("collection_name", 3, STRING),
        field("field_name", 4, STRING),
        field("index_name", 5, STRING),
        field("timestamp", 6, UINT64),
    ],
)
add_message(
    _file,
    "IndexDescription",
    [
        field("index_name", 1, STRING),
        field("indexID", 2, INT64),
        field("params", 3, MESSAGE, repeated=True, type_name=_KV),
        field("field_name", 4, STRING),
        field("indexed_rows", 5, INT64),
        field("total_rows", 6, INT64),
        field("state", 7, ENUM, type_name=f".{common.PACKAGE}.IndexState"),
        field("index_state_fail_reason", 8, STRING),
        field("pending_index_rows", 9, INT64),
    ],
)
add_message(
    _file,
    "DescribeIndexResponse",
    [
        field("status", 1, MESSAGE, type_name=_STATUS),
        field("index_descriptions", 2, MESSAGE, repeated=True, type_name=f".{PACKAGE}.IndexDescription"),
    ],
)
_index_target("DropIndexRequest")
_index_target("GetIndexStateRequest")
_index_target("GetIndexBuildProgressRequest")
add_message(
    _file,
    "GetIndexStateResponse",
    [
        field("status", 1, MESSAGE, type_name=_STATUS),
        field("state", 2, ENUM, type_name=f".{common.PACKAGE}.IndexState"),
        field("fail_reason", 3, STRING),
    ],
)
add_message(
    _file,
    "GetIndexBuildProgressResponse",
    [
        field("status", 1, MESSAGE, type_name=_STATUS),
        field("indexed_rows", 2, INT64),
        field("total_rows", 3, INT64),
    ],
)

_METHODS = [
    ("Search", "SearchRequest", "SearchResults"),
    ("CreateIndex", "CreateIndexRequest", _STATUS),
    ("DescribeIndex", "DescribeIndexRequest", "DescribeIndexResponse"),
    ("DropIndex", "DropIndexRequest", _STATUS),
    ("GetIndexState", "GetIndexStateRequest", "GetIndexStateResponse"),
    ("GetIndexBuildProgress", "GetIndexBuildProgressRequest", "GetIndexBuildProgressResponse"),
]


def _qualified(type_name):
    return type_name if type_name.startswith(".") else f".{PACKAGE}.{type_name}"


add_service(
    _file,
    "MilvusService",
    [(name, _qualified(req), _qualified(resp)) for name, req, resp in _METHODS],
)

DESCRIPTOR = register(_file)
SERVICE_DESCRIPTOR = DESCRIPTOR.services_by_name["MilvusService"]

SearchRequest = message_class(DESCRIPTOR, "SearchRequest")
SearchResults = message_class(DESCRIPTOR, "SearchResults")
MutationResult = message_class(DESCRIPTOR, "MutationResult")
CreateIndexRequest = message_class(DESCRIPTOR, "CreateIndexRequest")
DescribeIndexRequest = message_class(DESCRIPTOR, "DescribeIndexRequest")
IndexDescription = message_class(DESCRIPTOR, "IndexDescription")
DescribeIndexResponse = message_class(DESCRIPTOR, "DescribeIndexResponse")
DropIndexRequest = message_class(DESCRIPTOR, "DropIndexRequest")
GetIndexStateRequest = message_class(DESCRIPTOR, "GetIndexStateRequest")
GetIndexStateResponse = message_class(DESCRIPTOR, "GetIndexStateResponse")
GetIndexBuildProgressRequest = message_class(DESCRIPTOR, "GetIndexBuildProgressRequest")
GetIndexBuildProgressResponse = message_class(DESCRIPTOR, "GetIndexBuildProgressResponse")


class MilvusServiceStub:
    """Unary methods of MilvusService; works on both ``grpc`` and ``grpc.aio`` channels."""

    def __init__(self, channel):
        for method in SERVICE_DESCRIPTOR.methods:
            request_class = message_factory.GetMessageClass(method.input_type)
            response_class = message_factory.GetMessageClass(method.output_type)
            setattr(
                self,
                method.name,
                channel.unary_unary(
                    f"/{SERVICE_DESCRIPTOR.full_name}/{method.name}",
                    request_serializer=request_class.SerializeToString,
                    response_deserializer=response_class.FromString,
                ),
            )
