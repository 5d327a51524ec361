"""
Helpers that assemble FileDescriptorProtos and turn them into message classes.

The descriptors live in a private pool, so this package can be imported next to
another Milvus SDK that registers the same full names in the default pool.
"""

from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

from google.protobuf import descriptor, descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.internal import enum_type_wrapper

_Field = descriptor_pb2.FieldDescriptorProto

POOL = descriptor_pool.DescriptorPool()

BOOL = _Field.TYPE_BOOL
BYTES = _Field.TYPE_BYTES
ENUM = _Field.TYPE_ENUM
FLOAT = _Field.TYPE_FLOAT
INT32 = _Field.TYPE_INT32
INT64 = _Field.TYPE_INT64
MESSAGE = _Field.TYPE_MESSAGE
STRING = _Field.TYPE_STRING
UINT32 = _Field.TYPE_UINT32
UINT64 = _Field.TYPE_UINT64


class FieldSpec(NamedTuple):
    name: str
    number: int
    type: int
    repeated: bool = False
    type_name: Optional[str] = None
    oneof: Optional[str] = None


def field(
    name: str,
    number: int,
    type_: int,
    repeated: bool = False,
    type_name: Optional[str] = None,
    oneof: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(name, number, type_, repeated, type_name, oneof)


def new_file(name: str, package: str, dependencies: Sequence[str] = ()):
    file_proto = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    file_proto.dependency.extend(dependencies)
    return file_proto


def add_enum(file_proto: descriptor_pb2.FileDescriptorProto, name: str, values: Iterable[Tuple[str, int]]):
    enum_proto = file_proto.enum_type.add(name=name)
    for value_name, number in values:
        enum_proto.value.add(name=value_name, number=number)


def add_message(
    file_proto: descriptor_pb2.FileDescriptorProto,
    name: str,
    fields: Sequence[FieldSpec],
    oneofs: Sequence[str] = (),
):
    message_proto = file_proto.message_type.add(name=name)
    for oneof_name in oneofs:
        message_proto.oneof_decl.add(name=oneof_name)

    for spec in fields:
        field_proto = message_proto.field.add(
            name=spec.name,
            number=spec.number,
            type=spec.type,
            label=_Field.LABEL_REPEATED if spec.repeated else _Field.LABEL_OPTIONAL,
        )
        if spec.type_name is not None:
            field_proto.type_name = spec.type_name
        if spec.oneof is not None:
            field_proto.oneof_index = list(oneofs).index(spec.oneof)


def register(file_proto: descriptor_pb2.FileDescriptorProto):
    POOL.AddSerializedFile(file_proto.SerializeToString())
    return POOL.FindFileByName(file_proto.name)


def message_class(file_descriptor: descriptor.FileDescriptor, name: str):
    return message_factory.GetMessageClass(file_descriptor.message_types_by_name[name])


def enum_wrapper(file_descriptor: descriptor.FileDescriptor, name: str):
    return enum_type_wrapper.EnumTypeWrapper(file_descriptor.enum_types_by_name[name])


def add_service(
    file_proto: descriptor_pb2.FileDescriptorProto,
    name: str,
    methods: Iterable[Tuple[str, str, str]],
):
    """``methods`` holds (name, fully qualified input type, fully qualified output type)."""
    service_proto = file_proto.service.add(name=name)
    for method_name, input_type, output_type in methods:
        service_proto.method.add(name=method_name, input_type=input_type, output_type=output_type)
