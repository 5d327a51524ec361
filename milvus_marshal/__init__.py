# Copyright (C) 2019-2021 Zilliz. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except
# in compliance with the License. You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express
# or implied. See the License for the specific language governing permissions and limitations under
# the License.


from .client.abstract import (
    Hit,
    Hits,
    IndexBuildProgress,
    IndexInfo,
    MutationResult,
    SearchResult,
)
from .client.async_grpc_handler import AsyncGrpcHandler
from .client.blob import bytes_to_vector_float, placeholder_group, vector_float_to_bytes
from .client.decoder import (
    to_index_build_progress,
    to_index_infos,
    to_index_state,
    to_mutation_result,
    to_search_result,
)
from .client.grpc_handler import GrpcHandler
from .client.ids import IntIds, StrIds, decode_ids, encode_ids, ids_from_list
from .client.polling import async_poll, poll
from .client.prepare import Prepare
from .client.search_params import (
    BinaryVectors,
    FloatVectors,
    SearchParameters,
    SearchParametersBuilder,
)
from .client.ts_utils import get_guarantee_timestamp
from .client.types import ConsistencyLevel, IndexState, IndexType, MetricType
from .client.utils import hybridts_to_datetime, hybridts_to_unixtime, mkts_from_unixtime
from .exceptions import (
    DecodeError,
    ExceptionsMessage,
    MilvusException,
    ParamError,
    WaitCancelledError,
    WaitTimeoutError,
)
from .settings import Config

__version__ = "0.1.0"

__all__ = [
    "AsyncGrpcHandler",
    "BinaryVectors",
    "Config",
    "ConsistencyLevel",
    "DecodeError",
    "ExceptionsMessage",
    "FloatVectors",
    "GrpcHandler",
    "Hit",
    "Hits",
    "IndexBuildProgress",
    "IndexInfo",
    "IndexState",
    "IndexType",
    "IntIds",
    "MetricType",
    "MilvusException",
    "MutationResult",
    "ParamError",
    "Prepare",
    "SearchParameters",
    "SearchParametersBuilder",
    "SearchResult",
    "StrIds",
    "WaitCancelledError",
    "WaitTimeoutError",
    "__version__",
    "async_poll",
    "bytes_to_vector_float",
    "decode_ids",
    "encode_ids",
    "get_guarantee_timestamp",
    "hybridts_to_datetime",
    "hybridts_to_unixtime",
    "ids_from_list",
    "mkts_from_unixtime",
    "placeholder_group",
    "poll",
    "to_index_build_progress",
    "to_index_infos",
    "to_index_state",
    "to_mutation_result",
    "to_search_result",
    "vector_float_to_bytes",
]
