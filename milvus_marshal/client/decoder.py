"""Turns server responses into the client result types.

Every function takes the protobuf message as returned by the stub. The
response status is expected to be checked by the caller first.
"""

import logging
from typing import List

import ujson

from milvus_marshal.exceptions import DecodeError, ExceptionsMessage

from .abstract import Hit, Hits, IndexBuildProgress, IndexInfo, MutationResult, SearchResult
from .constants import PARAMS
from .ids import IntIds, StrIds, decode_ids
from .types import IndexState
from .utils import hybridts_to_datetime

logger = logging.getLogger(__name__)

_INDEX_STATES = {
    0: IndexState.IndexStateNone,
    1: IndexState.Unissued,
    2: IndexState.InProgress,
    3: IndexState.Finished,
    4: IndexState.Failed,
    5: IndexState.Retry,
}


def to_index_state(state: int) -> IndexState:
    try:
        return _INDEX_STATES[state]
    except (KeyError, TypeError) as e:
        raise DecodeError(message=ExceptionsMessage.UnknownIndexState % (state,)) from e


def to_mutation_result(raw) -> MutationResult:
    return MutationResult(
        ids=decode_ids(raw.IDs) if raw.HasField("IDs") else None,
        acknowledged=raw.acknowledged,
        insert_count=raw.insert_cnt,
        delete_count=raw.delete_cnt,
        upsert_count=raw.upsert_cnt,
        succ_index=raw.succ_index,
        err_index=raw.err_index,
        hybrid_timestamp=raw.timestamp,
        timestamp=hybridts_to_datetime(raw.timestamp),
    )


def to_index_build_progress(raw) -> IndexBuildProgress:
    return IndexBuildProgress(indexed_rows=raw.indexed_rows, total_rows=raw.total_rows)


def _index_params(index_name: str, kv_pairs) -> dict:
    """Flatten the pairs of an IndexDescription; top-level keys win over nested ones."""
    params = {kv.key: kv.value for kv in kv_pairs}
    nested = params.pop(PARAMS, None)
    if nested:
        try:
            loaded = ujson.loads(nested)
        except ValueError as e:
            raise DecodeError(
                message=ExceptionsMessage.IndexParamsMalformed % (index_name, nested)
            ) from e
        if not isinstance(loaded, dict):
            raise DecodeError(message=ExceptionsMessage.IndexParamsMalformed % (index_name, nested))
        for key, value in loaded.items():
            params.setdefault(key, value)
    return params


def to_index_infos(raw) -> List[IndexInfo]:
    return [
        IndexInfo(
            field_name=desc.field_name,
            index_name=desc.index_name,
            index_id=desc.indexID,
            params=_index_params(desc.index_name, desc.params),
            indexed_rows=desc.indexed_rows,
            total_rows=desc.total_rows,
            pending_index_rows=desc.pending_index_rows,
            state=to_index_state(desc.state),
            fail_reason=desc.index_state_fail_reason,
        )
        for desc in raw.index_descriptions
    ]


def to_search_result(raw) -> SearchResult:
    """Split the flat ids/scores of a SearchResults by per-query topks."""
    results = raw.results
    ids = decode_ids(results.ids) if results.HasField("ids") else None
    id_values = ids.values if isinstance(ids, (IntIds, StrIds)) else ()
    scores = list(results.scores)
    topks = list(results.topks)

    total = sum(topks)
    if total != len(id_values) or total != len(scores):
        raise DecodeError(
            message=ExceptionsMessage.SearchResultInconsistent
            % (total, len(id_values), len(scores))
        )

    hits, offset = [], 0
    for k in topks:
        hits.append(
            Hits(Hit(pk, score) for pk, score in zip(id_values[offset : offset + k], scores[offset : offset + k]))
        )
        offset += k
    logger.debug(f"decoded search result, nq: {len(hits)}, total hits: {total}")
    return SearchResult(hits, output_fields=tuple(results.output_fields))
