"""Subset of ``milvus.proto.schema`` used by this package."""

from ._builder import (
    FLOAT,
    INT64,
    MESSAGE,
    STRING,
    add_message,
    field,
    message_class,
    new_file,
    register,
)

PACKAGE = "milvus.proto.schema"

_file = new_file("schema.proto", PACKAGE)

add_message(_file, "LongArray", [field("data", 1, INT64, repeated=True)])
add_message(_file, "StringArray", [field("data", 1, STRING, repeated=True)])
add_message(
    _file,
    "IDs",
    [
        field("int_id", 1, MESSAGE, type_name=f".{PACKAGE}.LongArray", oneof="id_field"),
        field("str_id", 2, MESSAGE, type_name=f".{PACKAGE}.StringArray", oneof="id_field"),
    ],
    oneofs=["id_field"],
)
# fields_data (3) is not declared, output field values arrive as unknown fields
add_message(
    _file,
    "SearchResultData",
    [
        field("num_queries", 1, INT64),
        field("top_k", 2, INT64),
        field("scores", 4, FLOAT, repeated=True),
        field("ids", 5, MESSAGE, type_name=f".{PACKAGE}.IDs"),
        field("topks", 6, INT64, repeated=True),
        field("output_fields", 7, STRING, repeated=True),
    ],
)

DESCRIPTOR = register(_file)

LongArray = message_class(DESCRIPTOR, "LongArray")
StringArray = message_class(DESCRIPTOR, "StringArray")
IDs = message_class(DESCRIPTOR, "IDs")
SearchResultData = message_class(DESCRIPTOR, "SearchResultData")
