from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from milvus_marshal.exceptions import ExceptionsMessage, ParamError
from milvus_marshal.settings import Config

from .constants import DEFAULT_ROUND_DECIMAL, EVENTUALLY_TS
from .types import DEFAULT_CONSISTENCY_LEVEL, ConsistencyLevel, MetricType, get_consistency_level
from .utils import is_blank


@dataclass(frozen=True)
class FloatVectors:
    """Dense float target vectors, one sequence of floats per query"""

    data: Tuple[Sequence[float], ...]

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class BinaryVectors:
    """Packed binary target vectors, one bytes object per query"""

    data: Tuple[bytes, ...]

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class SearchParameters:
    """Immutable search settings, validated when a request is prepared.

    ``params`` is exposed read-only and left out of the hash, its values are
    arbitrary JSON values. Instances built by SearchParametersBuilder hash by
    the remaining fields.
    """

    collection_name: str
    vector_field_name: str
    top_k: int = 0
    metric_type: MetricType = MetricType.INVALID
    consistency_level: Optional[ConsistencyLevel] = DEFAULT_CONSISTENCY_LEVEL
    guarantee_timestamp: int = EVENTUALLY_TS
    travel_timestamp: int = 0
    output_fields: Tuple[str, ...] = ()
    partition_names: Tuple[str, ...] = ()
    expr: Optional[str] = None
    ignore_growing: bool = False
    round_decimal: int = DEFAULT_ROUND_DECIMAL
    params: Mapping[str, Any] = field(default_factory=dict, hash=False)
    db_name: str = Config.DEFAULT_DB_NAME
    vectors: Union[FloatVectors, BinaryVectors, None] = None

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def nq(self) -> int:
        return 0 if self.vectors is None else len(self.vectors)


def _float_row(v) -> Tuple[float, ...]:
    try:
        return tuple(v)
    except TypeError as e:
        raise ParamError(message=ExceptionsMessage.FloatVectorType % type(v).__name__) from e


class SearchParametersBuilder:
    """Collects search settings and produces an immutable SearchParameters.

    Example:
        >>> params = (
        ...     SearchParametersBuilder("docs", "embedding", ["title"])
        ...     .with_float_vectors([[0.1, 0.2], [0.3, 0.4]])
        ...     .with_metric_type(MetricType.L2)
        ...     .with_top_k(10)
        ...     .build()
        ... )
    """

    def __init__(
        self,
        collection_name: str,
        vector_field_name: str,
        output_fields: Iterable[str] = (),
        db_name: str = Config.DEFAULT_DB_NAME,
    ) -> None:
        self._collection_name = collection_name
        self._vector_field_name = vector_field_name
        self._db_name = db_name
        self._top_k = 0
        self._metric_type = MetricType.INVALID
        self._consistency_level = DEFAULT_CONSISTENCY_LEVEL
        self._guarantee_timestamp = EVENTUALLY_TS
        self._travel_timestamp = 0
        self._output_fields = []
        self._partition_names = []
        self._expr = None
        self._ignore_growing = False
        self._round_decimal = DEFAULT_ROUND_DECIMAL
        self._params = {}
        self._vectors = None
        self.with_output_fields(output_fields)

    def with_float_vectors(self, vectors: Iterable[Sequence[float]]):
        self._vectors = FloatVectors(tuple(_float_row(v) for v in vectors))
        return self

    def with_binary_vectors(self, vectors: Iterable[bytes]):
        self._vectors = BinaryVectors(
            tuple(bytes(v) if isinstance(v, (bytearray, memoryview)) else v for v in vectors)
        )
        return self

    def with_output_fields(self, output_fields: Iterable[str]):
        for name in output_fields:
            self.add_output_field(name)
        return self

    def add_output_field(self, field_name: str):
        if is_blank(field_name):
            raise ParamError(message=ExceptionsMessage.FieldNameBlank)
        if field_name not in self._output_fields:
            self._output_fields.append(field_name)
        return self

    def with_partition_names(self, partition_names: Iterable[str]):
        for name in partition_names:
            self.add_partition_name(name)
        return self

    def add_partition_name(self, partition_name: str):
        if is_blank(partition_name):
            raise ParamError(message=f"Partition name cannot be empty or blank, got {partition_name!r}.")
        if partition_name not in self._partition_names:
            self._partition_names.append(partition_name)
        return self

    def with_expr(self, expr: str):
        if is_blank(expr):
            raise ParamError(message=ExceptionsMessage.ExprBlank)
        self._expr = expr
        return self

    def with_consistency_level(self, consistency_level: Union[ConsistencyLevel, str, int, None]):
        self._consistency_level = get_consistency_level(consistency_level)
        return self

    def with_guarantee_timestamp(self, guarantee_timestamp: int):
        self._guarantee_timestamp = guarantee_timestamp
        return self

    def with_travel_timestamp(self, travel_timestamp: int):
        self._travel_timestamp = travel_timestamp
        return self

    def with_metric_type(self, metric_type: MetricType):
        self._metric_type = MetricType(metric_type)
        return self

    def with_round_decimal(self, round_decimal: int):
        if not isinstance(round_decimal, int) or isinstance(round_decimal, bool):
            raise ParamError(message=ExceptionsMessage.RoundDecimalType % (round_decimal,))
        self._round_decimal = round_decimal
        return self

    def with_vector_field_name(self, vector_field_name: str):
        if is_blank(vector_field_name):
            raise ParamError(message=ExceptionsMessage.VectorFieldNameBlank)
        self._vector_field_name = vector_field_name
        return self

    def with_top_k(self, top_k: int):
        self._top_k = top_k
        return self

    def with_parameter(self, key: str, value: Any):
        if is_blank(key):
            raise ParamError(message=ExceptionsMessage.ParamKeyBlank)
        self._params[key] = value
        return self

    def with_params(self, params: Dict[str, Any]):
        for key, value in params.items():
            self.with_parameter(key, value)
        return self

    def with_ignore_growing(self, ignore_growing: bool = True):
        self._ignore_growing = bool(ignore_growing)
        return self

    def with_db_name(self, db_name: str):
        self._db_name = db_name
        return self

    def build(self) -> SearchParameters:
        return SearchParameters(
            collection_name=self._collection_name,
            vector_field_name=self._vector_field_name,
            top_k=self._top_k,
            metric_type=self._metric_type,
            consistency_level=self._consistency_level,
            guarantee_timestamp=self._guarantee_timestamp,
            travel_timestamp=self._travel_timestamp,
            output_fields=tuple(self._output_fields),
            partition_names=tuple(self._partition_names),
            expr=self._expr,
            ignore_growing=self._ignore_growing,
            round_decimal=self._round_decimal,
            params=dict(self._params),
            db_name=self._db_name,
            vectors=self._vectors,
        )
