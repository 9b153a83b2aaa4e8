# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Canonical binary serialization: equal values always have the same encoding, and decoding rejects any input that
is not the exact encoding of some value.
"""

from canonser.api import deserialize, deserialize_prefix, serialize
from canonser.serialization.exceptions import (
    BadDataError,
    DuplicateKeyError,
    InvalidBooleanError,
    InvalidCharError,
    InvalidOptionTagError,
    InvalidUtf8Error,
    LengthOverflowError,
    MapNotCanonicallyOrderedError,
    NonCanonicalLengthError,
    RecursionLimitExceededError,
    SerializationError,
    SinkExhaustedError,
    TrailingDataError,
    UnexpectedEndOfInputError,
    UnknownVariantTagError,
)
from canonser.shapes import Shape, make_shape
from canonser.types import (
    SumType,
    char,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    int128,
    uint8,
    uint16,
    uint32,
    uint64,
    uint128,
)
from canonser.version import __version__

__all__ = [
    '__version__',
    'BadDataError',
    'DuplicateKeyError',
    'InvalidBooleanError',
    'InvalidCharError',
    'InvalidOptionTagError',
    'InvalidUtf8Error',
    'LengthOverflowError',
    'MapNotCanonicallyOrderedError',
    'NonCanonicalLengthError',
    'RecursionLimitExceededError',
    'SerializationError',
    'Shape',
    'SinkExhaustedError',
    'SumType',
    'TrailingDataError',
    'UnexpectedEndOfInputError',
    'UnknownVariantTagError',
    'char',
    'deserialize',
    'deserialize_prefix',
    'float32',
    'float64',
    'int8',
    'int16',
    'int32',
    'int64',
    'int128',
    'make_shape',
    'serialize',
    'uint8',
    'uint16',
    'uint32',
    'uint64',
    'uint128',
]
