from enum import IntEnum
from typing import Union

from milvus_marshal.exceptions import ParamError


class ConsistencyLevel(IntEnum):
    """Wire values of ``common.ConsistencyLevel``"""

    Strong = 0
    Session = 1
    Bounded = 2
    Eventually = 3
    Customized = 4


DEFAULT_CONSISTENCY_LEVEL = ConsistencyLevel.Bounded


class MetricType(IntEnum):
    INVALID = 0
    L2 = 1
    IP = 2
    # Only supported for byte vectors
    HAMMING = 3
    JACCARD = 4
    TANIMOTO = 5
    SUBSTRUCTURE = 6
    SUPERSTRUCTURE = 7

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._name_}>"

    def __str__(self) -> str:
        return self._name_


class IndexType(IntEnum):
    INVALID = 0
    FLAT = 1
    IVF_FLAT = 2
    IVF_SQ8 = 3
    IVF_PQ = 4
    HNSW = 5
    RHNSW_FLAT = 6
    RHNSW_PQ = 7
    RHNSW_SQ = 8
    ANNOY = 9
    # Only supported for byte vectors
    BIN_FLAT = 10
    BIN_IVF_FLAT = 11
    AUTOINDEX = 12

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._name_}>"

    def __str__(self) -> str:
        return self._name_


class IndexState(IntEnum):
    IndexStateNone = 0
    Unissued = 1
    InProgress = 2
    Finished = 3
    Failed = 4
    Retry = 5

    @property
    def is_terminal(self) -> bool:
        return self in (IndexState.Finished, IndexState.Failed)


class PlaceholderType(IntEnum):
    NoneType = 0
    BinaryVector = 100
    FloatVector = 101


def get_consistency_level(consistency_level: Union[str, int, ConsistencyLevel, None]):
    """Accepts a ConsistencyLevel, its wire value or its name; None means the default."""
    if consistency_level is None:
        return None
    if isinstance(consistency_level, str):
        try:
            return ConsistencyLevel[consistency_level]
        except KeyError as e:
            raise ParamError(message=f"invalid consistency level: {consistency_level}") from e
    if isinstance(consistency_level, int) and not isinstance(consistency_level, bool):
        try:
            return ConsistencyLevel(consistency_level)
        except ValueError as e:
            raise ParamError(message=f"invalid consistency level: {consistency_level}") from e
    raise ParamError(message=f"invalid consistency level: {consistency_level!r}")
