import datetime

import pytest
from milvus_marshal.client import decoder
from milvus_marshal.client.abstract import Hit, IndexBuildProgress
from milvus_marshal.client.ids import IntIds, StrIds
from milvus_marshal.client.types import IndexState
from milvus_marshal.exceptions import DecodeError
from milvus_marshal.proto import common, milvus, schema


class TestToIndexState:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (0, IndexState.IndexStateNone),
            (1, IndexState.Unissued),
            (2, IndexState.InProgress),
            (3, IndexState.Finished),
            (4, IndexState.Failed),
            (5, IndexState.Retry),
        ],
    )
    def test_known(self, raw, expected):
        assert decoder.to_index_state(raw) is expected

    @pytest.mark.parametrize("raw", [-1, 6, 100, None])
    def test_unknown(self, raw):
        with pytest.raises(DecodeError):
            decoder.to_index_state(raw)

    def test_terminal_states(self):
        terminal = {s for s in IndexState if s.is_terminal}
        assert terminal == {IndexState.Finished, IndexState.Failed}


class TestToMutationResult:
    def test_int_ids(self):
        ts = (1700000000000 << 18) + 3
        raw = milvus.MutationResult(
            IDs=schema.IDs(int_id=schema.LongArray(data=[101, 102])),
            succ_index=[0, 1],
            err_index=[2],
            acknowledged=True,
            insert_cnt=2,
            timestamp=ts,
        )
        result = decoder.to_mutation_result(raw)

        assert result.ids == IntIds((101, 102))
        assert not raw.IDs.HasField("str_id")
        assert result.primary_keys == [101, 102]
        assert result.insert_count == 2
        assert result.delete_count == 0
        assert result.upsert_count == 0
        assert result.acknowledged is True
        assert result.succ_index == (0, 1)
        assert result.err_index == (2,)
        assert (result.succ_count, result.err_count) == (2, 1)
        assert result.hybrid_timestamp == ts
        assert result.timestamp == datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)

    def test_str_ids(self):
        raw = milvus.MutationResult(
            IDs=schema.IDs(str_id=schema.StringArray(data=["a"])), delete_cnt=1
        )
        result = decoder.to_mutation_result(raw)
        assert result.ids == StrIds(("a",))
        assert result.delete_count == 1

    def test_absent_ids(self):
        result = decoder.to_mutation_result(milvus.MutationResult(upsert_cnt=4))
        assert result.ids is None
        assert result.primary_keys == []
        assert result.upsert_count == 4


class TestToIndexBuildProgress:
    @pytest.mark.parametrize(
        "indexed, total, complete",
        [(500, 500, True), (499, 500, False), (0, 0, True), (0, 10, False)],
    )
    def test_progress(self, indexed, total, complete):
        raw = milvus.GetIndexBuildProgressResponse(indexed_rows=indexed, total_rows=total)
        progress = decoder.to_index_build_progress(raw)
        assert progress == IndexBuildProgress(indexed, total)
        assert progress.is_complete is complete

    def test_negative_total_never_complete(self):
        assert not IndexBuildProgress(-1, -1).is_complete


class TestToIndexInfos:
    def test_nested_params_decoded(self):
        raw = milvus.DescribeIndexResponse(
            index_descriptions=[
                milvus.IndexDescription(
                    index_name="emb_idx",
                    indexID=42,
                    field_name="embedding",
                    params=[
                        common.KeyValuePair(key="index_type", value="IVF_FLAT"),
                        common.KeyValuePair(key="metric_type", value="L2"),
                        common.KeyValuePair(key="params", value='{"nlist": 128}'),
                    ],
                    indexed_rows=10,
                    total_rows=20,
                    pending_index_rows=10,
                    state=2,
                )
            ]
        )
        (info,) = decoder.to_index_infos(raw)
        assert info.index_name == "emb_idx"
        assert info.index_id == 42
        assert info.field_name == "embedding"
        assert info.params == {"index_type": "IVF_FLAT", "metric_type": "L2", "nlist": 128}
        assert info.state is IndexState.InProgress
        assert (info.indexed_rows, info.total_rows, info.pending_index_rows) == (10, 20, 10)

    def test_empty(self):
        assert decoder.to_index_infos(milvus.DescribeIndexResponse()) == []

    @pytest.mark.parametrize("value", ["{bad", "5", "[1, 2]", '"abc"', "null", "true"])
    def test_malformed_params(self, value):
        raw = milvus.DescribeIndexResponse(
            index_descriptions=[
                milvus.IndexDescription(params=[common.KeyValuePair(key="params", value=value)])
            ]
        )
        with pytest.raises(DecodeError):
            decoder.to_index_infos(raw)

    def test_nested_params_do_not_shadow_top_level(self):
        raw = milvus.DescribeIndexResponse(
            index_descriptions=[
                milvus.IndexDescription(
                    params=[
                        common.KeyValuePair(key="index_type", value="HNSW"),
                        common.KeyValuePair(key="params", value='{"index_type": "FLAT", "M": 8}'),
                    ]
                )
            ]
        )
        (info,) = decoder.to_index_infos(raw)
        assert info.params == {"index_type": "HNSW", "M": 8}

    def test_unknown_state(self):
        desc = milvus.IndexDescription()
        desc.state = 42
        raw = milvus.DescribeIndexResponse(index_descriptions=[desc])
        with pytest.raises(DecodeError):
            decoder.to_index_infos(raw)


class TestToSearchResult:
    def test_split_by_topks(self):
        raw = milvus.SearchResults(
            results=schema.SearchResultData(
                num_queries=2,
                top_k=2,
                scores=[0.5, 0.25, 1.0],
                ids=schema.IDs(int_id=schema.LongArray(data=[1, 2, 3])),
                topks=[2, 1],
                output_fields=["id"],
            )
        )
        result = decoder.to_search_result(raw)

        assert result.nq == 2
        assert result[0].ids == [1, 2]
        assert result[0].distances == [0.5, 0.25]
        assert list(result[1]) == [Hit(3, 1.0)]
        assert result.output_fields == ("id",)

    def test_str_ids(self):
        raw = milvus.SearchResults(
            results=schema.SearchResultData(
                scores=[0.5], ids=schema.IDs(str_id=schema.StringArray(data=["a"])), topks=[1]
            )
        )
        assert decoder.to_search_result(raw)[0][0].id == "a"

    def test_empty(self):
        assert decoder.to_search_result(milvus.SearchResults()).nq == 0

    def test_inconsistent(self):
        raw = milvus.SearchResults(
            results=schema.SearchResultData(
                scores=[0.5], ids=schema.IDs(int_id=schema.LongArray(data=[1, 2])), topks=[2]
            )
        )
        with pytest.raises(DecodeError):
            decoder.to_search_result(raw)
