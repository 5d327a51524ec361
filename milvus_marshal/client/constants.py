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


LOGICAL_BITS = 18
EVENTUALLY_TS = 1

MIN_TOPK = 1
MAX_TOPK = 16384
DEFAULT_ROUND_DECIMAL = -1

# placeholder tag of the target vectors in a search request
VECTOR_TAG = "$0"

# search_params keys, sent in this order
ANNS_FIELD = "anns_field"
TOPK = "topk"
METRIC_TYPE = "metric_type"
IGNORE_GROWING = "ignore_growing"
ROUND_DECIMAL = "round_decimal"
PARAMS = "params"

# create_index extra_params keys
INDEX_TYPE = "index_type"

ID_FIELD = "id_field"
