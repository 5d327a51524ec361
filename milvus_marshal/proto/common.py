"""Subset of ``milvus.proto.common`` used by this package."""

from ._builder import (
    BOOL,
    BYTES,
    ENUM,
    INT32,
    MESSAGE,
    STRING,
    add_enum,
    add_message,
    enum_wrapper,
    field,
    message_class,
    new_file,
    register,
)

PACKAGE = "milvus.proto.common"

_file = new_file("common.proto", PACKAGE)

add_enum(
    _file,
    "PlaceholderType",
    [
        ("None", 0),
        ("BinaryVector", 100),
        ("FloatVector", 101),
        ("Float16Vector", 102),
        ("BFloat16Vector", 103),
        ("SparseFloatVector", 104),
        ("Int8Vector", 105),
        ("Int64", 5),
        ("VarChar", 21),
    ],
)
add_enum(
    _file,
    "IndexState",
    [
        ("IndexStateNone", 0),
        ("Unissued", 1),
        ("InProgress", 2),
        ("Finished", 3),
        ("Failed", 4),
        ("Retry", 5),
    ],
)
add_enum(_file, "DslType", [("Dsl", 0), ("BoolExprV1", 1)])
add_enum(
    _file,
    "ConsistencyLevel",
    [("Strong", 0), ("Session", 1), ("Bounded", 2), ("Eventually", 3), ("Customized", 4)],
)

# error_code is the deprecated common.ErrorCode enum, same varint encoding as int32
add_message(
    _file,
    "Status",
    [
        field("error_code", 1, INT32),
        field("reason", 2, STRING),
        field("code", 3, INT32),
        field("retriable", 4, BOOL),
        field("detail", 5, STRING),
    ],
)
add_message(_file, "KeyValuePair", [field("key", 1, STRING), field("value", 2, STRING)])
add_message(
    _file,
    "PlaceholderValue",
    [
        field("tag", 1, STRING),
        field("type", 2, ENUM, type_name=f".{PACKAGE}.PlaceholderType"),
        field("values", 3, BYTES, repeated=True),
    ],
)
add_message(
    _file,
    "PlaceholderGroup",
    [field("placeholders", 1, MESSAGE, repeated=True, type_name=f".{PACKAGE}.PlaceholderValue")],
)

DESCRIPTOR = register(_file)

PlaceholderType = enum_wrapper(DESCRIPTOR, "PlaceholderType")
IndexState = enum_wrapper(DESCRIPTOR, "IndexState")
DslType = enum_wrapper(DESCRIPTOR, "DslType")
ConsistencyLevel = enum_wrapper(DESCRIPTOR, "ConsistencyLevel")

Status = message_class(DESCRIPTOR, "Status")
KeyValuePair = message_class(DESCRIPTOR, "KeyValuePair")
PlaceholderValue = message_class(DESCRIPTOR, "PlaceholderValue")
PlaceholderGroup = message_class(DESCRIPTOR, "PlaceholderGroup")
