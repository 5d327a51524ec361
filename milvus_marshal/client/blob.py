import sys
from typing import List, Sequence, Union

import numpy as np

from milvus_marshal.exceptions import ExceptionsMessage, ParamError
from milvus_marshal.proto import common

from .constants import VECTOR_TAG
from .search_params import BinaryVectors, FloatVectors
from .types import PlaceholderType

_LITTLE_ENDIAN_F32 = np.dtype("<f4")


def vector_float_to_bytes(v: Sequence[float], byteorder: str = sys.byteorder) -> bytes:
    """Pack floats as consecutive 4-byte IEEE-754 little-endian values.

    ``byteorder`` is the order of the host representation; a big-endian host
    buffer is swapped so the result is little-endian either way.
    """
    host_dtype = _LITTLE_ENDIAN_F32 if byteorder == "little" else _LITTLE_ENDIAN_F32.newbyteorder(">")
    host = np.asarray(v, dtype=host_dtype)
    if byteorder != "little":
        host = host.byteswap().view(_LITTLE_ENDIAN_F32)
    return host.tobytes()


def bytes_to_vector_float(buf: bytes, dim: int) -> List[List[float]]:
    if dim <= 0:
        raise ParamError(message=ExceptionsMessage.VectorDimZero)
    flat = np.frombuffer(buf, dtype=_LITTLE_ENDIAN_F32)
    if flat.size % dim != 0:
        raise ParamError(message=f"buffer of {len(buf)} bytes is not a multiple of dim {dim}")
    return flat.reshape(-1, dim).tolist()


def vector_binary_to_bytes(v: Union[bytes, bytearray, memoryview]) -> bytes:
    return bytes(v)


def _check_uniform(lengths: List[int]):
    if len(lengths) == 0:
        raise ParamError(message=ExceptionsMessage.VectorsEmpty)
    expected = lengths[0]
    for length in lengths:
        if length != expected:
            raise ParamError(message=ExceptionsMessage.VectorDimInconsistent % (expected, length))
    if expected == 0:
        raise ParamError(message=ExceptionsMessage.VectorDimZero)


def _float_values(vectors: FloatVectors) -> List[bytes]:
    _check_uniform([len(v) for v in vectors.data])
    return [vector_float_to_bytes(v) for v in vectors.data]


def _binary_values(vectors: BinaryVectors) -> List[bytes]:
    for v in vectors.data:
        if not isinstance(v, (bytes, bytearray, memoryview)):
            raise ParamError(message=ExceptionsMessage.BinaryVectorType % type(v).__name__)
    _check_uniform([len(v) for v in vectors.data])
    return [vector_binary_to_bytes(v) for v in vectors.data]


def placeholder_group(vectors: Union[FloatVectors, BinaryVectors, None]):
    """Wrap the target vectors in a single-entry PlaceholderGroup tagged ``$0``."""
    if isinstance(vectors, FloatVectors):
        pl_type, pl_values = PlaceholderType.FloatVector, _float_values(vectors)
    elif isinstance(vectors, BinaryVectors):
        pl_type, pl_values = PlaceholderType.BinaryVector, _binary_values(vectors)
    else:
        raise ParamError(message=ExceptionsMessage.VectorsAbsent)

    pl = common.PlaceholderValue(tag=VECTOR_TAG, type=int(pl_type), values=pl_values)
    return common.PlaceholderGroup(placeholders=[pl])
