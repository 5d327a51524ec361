import pytest
from milvus_marshal.client.search_params import (
    BinaryVectors,
    FloatVectors,
    SearchParameters,
    SearchParametersBuilder,
)
from milvus_marshal.client.types import ConsistencyLevel, MetricType
from milvus_marshal.exceptions import ParamError


@pytest.fixture
def builder():
    return SearchParametersBuilder("docs", "embedding", ["id"])


class TestSearchParametersBuilder:
    def test_defaults(self, builder):
        params = builder.build()
        assert params.collection_name == "docs"
        assert params.vector_field_name == "embedding"
        assert params.output_fields == ("id",)
        assert params.consistency_level == ConsistencyLevel.Bounded
        assert params.guarantee_timestamp == 1
        assert params.travel_timestamp == 0
        assert params.round_decimal == -1
        assert params.metric_type == MetricType.INVALID
        assert params.db_name == "default"
        assert params.vectors is None
        assert params.nq == 0

    def test_vectors_last_write_wins(self, builder):
        params = builder.with_float_vectors([[1.0, 2.0]]).with_binary_vectors([b"\x01"]).build()
        assert params.vectors == BinaryVectors((b"\x01",))

        params = builder.with_float_vectors([[1.0, 2.0]]).build()
        assert isinstance(params.vectors, FloatVectors)
        assert params.nq == 1

    def test_output_fields_and_partitions_deduplicated(self, builder):
        params = (
            builder.with_output_fields(["id", "title", "id"])
            .with_partition_names(["p1", "p2"])
            .add_partition_name("p1")
            .build()
        )
        assert params.output_fields == ("id", "title")
        assert params.partition_names == ("p1", "p2")

    def test_params_copied_on_build(self, builder):
        params = builder.with_parameter("nprobe", 10).build()
        builder.with_parameter("ef", 64)
        assert params.params == {"nprobe": 10}

    def test_built_value_is_frozen(self, builder):
        params = builder.build()
        with pytest.raises(AttributeError):
            params.top_k = 3

    def test_params_read_only(self, builder):
        params = builder.with_parameter("nprobe", 10).build()
        with pytest.raises(TypeError):
            params.params["nprobe"] = 20
        assert params.params == {"nprobe": 10}

    def test_vectors_detached_from_input(self, builder):
        rows = [[1.0, 2.0]]
        params = builder.with_float_vectors(rows).build()
        rows[0].append(3.0)
        assert params.vectors == FloatVectors(((1.0, 2.0),))

        params = builder.with_binary_vectors([bytearray(b"\x01")]).build()
        assert params.vectors == BinaryVectors((b"\x01",))

    def test_built_value_is_hashable(self, builder):
        builder.with_float_vectors([[1.0, 2.0]]).with_parameter("nprobe", 10)
        first, second = builder.build(), builder.build()
        assert first == second
        assert hash(first) == hash(second)

    def test_float_row_must_be_sequence(self, builder):
        with pytest.raises(ParamError):
            builder.with_float_vectors([1.0, 2.0])

    @pytest.mark.parametrize(
        "level, expected",
        [
            pytest.param("Strong", ConsistencyLevel.Strong, id="name"),
            pytest.param(3, ConsistencyLevel.Eventually, id="value"),
            pytest.param(None, None, id="server_default"),
        ],
    )
    def test_consistency_level(self, builder, level, expected):
        assert builder.with_consistency_level(level).build().consistency_level == expected

    @pytest.mark.parametrize(
        "call",
        [
            pytest.param(lambda b: b.with_expr("  "), id="blank_expr"),
            pytest.param(lambda b: b.with_expr(""), id="empty_expr"),
            pytest.param(lambda b: b.with_parameter(" ", 1), id="blank_param_key"),
            pytest.param(lambda b: b.add_output_field(""), id="blank_output_field"),
            pytest.param(lambda b: b.add_partition_name(" "), id="blank_partition"),
            pytest.param(lambda b: b.with_vector_field_name(""), id="blank_vector_field"),
            pytest.param(lambda b: b.with_round_decimal("2"), id="round_decimal_type"),
            pytest.param(lambda b: b.with_consistency_level("Sometimes"), id="unknown_level_name"),
            pytest.param(lambda b: b.with_consistency_level(9), id="unknown_level_value"),
        ],
    )
    def test_rejected_input(self, builder, call):
        with pytest.raises(ParamError):
            call(builder)

    def test_direct_construction(self):
        params = SearchParameters("c", "v", top_k=5, vectors=FloatVectors(([1.0],)))
        assert params.nq == 1
