"""Tagged union of primary keys carried by ``schema.IDs``.

The wire message holds either an ``int_id`` or a ``str_id`` branch of the
``id_field`` oneof. Decoding reads the discriminant and copies only that
branch; an absent message or an unset discriminant decodes as ``None``.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from milvus_marshal.exceptions import ExceptionsMessage, ParamError
from milvus_marshal.proto import schema

from .constants import ID_FIELD


@dataclass(frozen=True)
class IntIds:
    values: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


@dataclass(frozen=True)
class StrIds:
    values: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


Ids = Union[IntIds, StrIds, None]


def decode_ids(raw) -> Ids:
    if raw is None:
        return None
    which = raw.WhichOneof(ID_FIELD)
    if which == "int_id":
        return IntIds(tuple(raw.int_id.data))
    if which == "str_id":
        return StrIds(tuple(raw.str_id.data))
    return None


def encode_ids(ids: Ids):
    raw = schema.IDs()
    if isinstance(ids, IntIds):
        # touch the branch so an empty list still selects int_id
        raw.int_id.SetInParent()
        raw.int_id.data.extend(ids.values)
    elif isinstance(ids, StrIds):
        raw.str_id.SetInParent()
        raw.str_id.data.extend(ids.values)
    return raw


def ids_from_list(values: Optional[Iterable[Union[int, str]]]) -> Ids:
    if values is None:
        return None
    values = list(values)
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return IntIds(tuple(values))
    if all(isinstance(v, str) for v in values):
        return StrIds(tuple(values))
    raise ParamError(message=ExceptionsMessage.IdsMixedType % (values,))
