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


from enum import IntEnum


class ErrorCode(IntEnum):
    SUCCESS = 0
    UNEXPECTED_ERROR = 1


class MilvusException(Exception):
    def __init__(self, code: int = ErrorCode.UNEXPECTED_ERROR, message: str = "") -> None:
        super().__init__()
        self._code = code
        self._message = message

    @property
    def code(self):
        return self._code

    @property
    def message(self):
        return self._message

    def __str__(self) -> str:
        return f"<{type(self).__name__}: (code={self.code}, message={self.message})>"


class ParamError(MilvusException):
    """Raise when params are incorrect"""


class DecodeError(MilvusException):
    """Raise when a server response cannot be mapped onto the client model"""


class WaitTimeoutError(MilvusException):
    """Raise when a polled operation doesn't finish before the deadline"""


class WaitCancelledError(MilvusException):
    """Raise when waiting on a polled operation is cancelled by the caller"""


class ExceptionsMessage:
    CollectionNameBlank = "Collection name cannot be empty or blank."
    VectorFieldNameBlank = "Vector field name cannot be empty or blank."
    FieldNameBlank = "Field name cannot be empty or blank."
    DatabaseNameBlank = "Database name cannot be empty or blank."
    OutputFieldsEmpty = "Output fields cannot be empty."
    DuplicateOutputField = "Output field %r is specified more than once."
    DuplicatePartition = "Partition %r is specified more than once."
    GuaranteeTimestampNegative = "Guarantee timestamp must be a non-negative integer, got %r."
    TravelTimestampNegative = "Travel timestamp must be a non-negative integer, got %r."
    MetricTypeInvalid = "Metric type cannot be MetricType.INVALID."
    IndexTypeInvalid = "Index type cannot be IndexType.INVALID."
    VectorsAbsent = "Target vectors must be specified."
    VectorsEmpty = "Target vectors cannot be empty."
    VectorDimInconsistent = "All target vectors must have the same dimension, expected %d but got %d."
    VectorDimZero = "Target vectors cannot have zero dimension."
    BinaryVectorType = "Binary vectors must be bytes-like, got %r."
    FloatVectorType = "Float vectors must be sequences of numbers, got %r."
    TopKRange = "top_k must be in range [1, %d], got %r."
    ExprBlank = "Filter expression cannot be empty or blank."
    ParamKeyBlank = "Extra search parameter key cannot be empty or blank."
    RoundDecimalType = "round_decimal must be an integer, got %r."
    IdsMixedType = "Identifiers must be all int or all str, got %r."
    UnknownIndexState = "Unknown index state %r returned by server."
    SearchResultInconsistent = (
        "Search result is inconsistent: topks sum to %d but %d ids and %d scores were returned."
    )
    IndexParamsMalformed = "Index %r returned malformed params: %s"
    IndexBuildTimeout = "Timeout when waiting for index '%s' on collection '%s' to build"
    UnnamedIndexBuildTimeout = "Timeout when waiting for index on collection '%s' to build"
    WaitCancelled = "Waiting was cancelled."
    IntervalInvalid = "Polling interval must be positive, got %r."
