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
The byte-level layer of the codec.

`Serializer` and `Deserializer` are the cursors shared by every encoder, the `encoding` subpackage holds the
primitive and length encoders and `compound_encoding` holds the encoders that delegate to other encoders.
"""

from .deserializer import Deserializer
from .exceptions import (
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
from .serializer import Serializer

__all__ = [
    'BadDataError',
    'Deserializer',
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
    'Serializer',
    'SinkExhaustedError',
    'TrailingDataError',
    'UnexpectedEndOfInputError',
    'UnknownVariantTagError',
]
