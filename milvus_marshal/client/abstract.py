import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

from .ids import Ids, IntIds, StrIds
from .types import IndexState


class MutationResult:
    """Outcome of an insert, delete or upsert, copied out of the server response.

    Rows listed in ``err_index`` failed individually; a partial failure is not
    raised as an error.
    """

    def __init__(
        self,
        ids: Ids = None,
        acknowledged: bool = False,
        insert_count: int = 0,
        delete_count: int = 0,
        upsert_count: int = 0,
        succ_index: Sequence[int] = (),
        err_index: Sequence[int] = (),
        hybrid_timestamp: int = 0,
        timestamp: Union[datetime.datetime, None] = None,
    ):
        self._ids = ids
        self._acknowledged = acknowledged
        self._insert_cnt = insert_count
        self._delete_cnt = delete_count
        self._upsert_cnt = upsert_count
        self._succ_index = tuple(succ_index)
        self._err_index = tuple(err_index)
        self._hybrid_timestamp = hybrid_timestamp
        self._timestamp = timestamp

    @property
    def ids(self) -> Ids:
        return self._ids

    @property
    def primary_keys(self) -> List[Union[int, str]]:
        if isinstance(self._ids, (IntIds, StrIds)):
            return list(self._ids.values)
        return []

    @property
    def acknowledged(self):
        return self._acknowledged

    @property
    def insert_count(self):
        return self._insert_cnt

    @property
    def delete_count(self):
        return self._delete_cnt

    @property
    def upsert_count(self):
        return self._upsert_cnt

    @property
    def hybrid_timestamp(self):
        return self._hybrid_timestamp

    @property
    def timestamp(self):
        return self._timestamp

    @property
    def succ_count(self):
        return len(self._succ_index)

    @property
    def err_count(self):
        return len(self._err_index)

    @property
    def succ_index(self):
        return self._succ_index

    @property
    def err_index(self):
        return self._err_index

    def __str__(self):
        return (
            f"(insert count: {self._insert_cnt}, delete count: {self._delete_cnt}, upsert count: {self._upsert_cnt}, "
            f"timestamp: {self._hybrid_timestamp}, success count: {self.succ_count}, err count: {self.err_count})"
        )

    __repr__ = __str__


@dataclass(frozen=True)
class IndexBuildProgress:
    indexed_rows: int
    total_rows: int

    @property
    def is_complete(self) -> bool:
        return self.total_rows >= 0 and self.indexed_rows == self.total_rows


@dataclass(frozen=True)
class IndexInfo:
    field_name: str
    index_name: str
    index_id: int
    params: Dict[str, Any] = field(default_factory=dict)
    indexed_rows: int = 0
    total_rows: int = 0
    pending_index_rows: int = 0
    state: IndexState = IndexState.IndexStateNone
    fail_reason: str = ""


class Hit:
    def __init__(self, pk: Union[int, str], distance: float):
        self._id = pk
        self._distance = distance

    @property
    def id(self):
        return self._id

    @property
    def pk(self):
        return self._id

    @property
    def distance(self):
        return self._distance

    @property
    def score(self):
        return self._distance

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Hit) and (self._id, self._distance) == (other.id, other.distance)

    def __hash__(self) -> int:
        return hash((self._id, self._distance))

    def __str__(self) -> str:
        return f"id: {self._id}, distance: {self._distance}"

    __repr__ = __str__


class Hits(tuple):
    """Hits of one query vector, ordered as returned by the server"""

    @property
    def ids(self) -> List[Union[int, str]]:
        return [hit.id for hit in self]

    @property
    def distances(self) -> List[float]:
        return [hit.distance for hit in self]


class SearchResult(tuple):
    """One ``Hits`` per query vector, in query order"""

    def __new__(cls, hits: Sequence[Hits] = (), output_fields: Tuple[str, ...] = ()):
        obj = super().__new__(cls, hits)
        obj._output_fields = tuple(output_fields)
        return obj

    @property
    def nq(self) -> int:
        return len(self)

    @property
    def output_fields(self) -> Tuple[str, ...]:
        return self._output_fields

    def __str__(self) -> str:
        return f"data: {[list(hits) for hits in self]}"
