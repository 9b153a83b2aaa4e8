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
All errors raised by the codec derive from `SerializationError`.

Decoding errors are always fatal to the whole decode call, there is no recovery and no partial result. Since
`SerializationError` is a `ValueError`, callers that only care about "bad input" can catch `ValueError`.
"""


class SerializationError(ValueError):
    """Base class of every encoding and decoding error."""


class UnexpectedEndOfInputError(SerializationError):
    """The source ran out of bytes before the value was fully decoded."""


class BadDataError(SerializationError):
    """The bytes are well delimited but do not represent a canonical value."""


class InvalidBooleanError(BadDataError):
    pass


class InvalidCharError(BadDataError):
    pass


class InvalidOptionTagError(BadDataError):
    pass


class UnknownVariantTagError(BadDataError):
    pass


class InvalidUtf8Error(BadDataError):
    pass


class NonCanonicalLengthError(BadDataError):
    """A ULEB128 value was not encoded with the minimum number of bytes."""


class LengthOverflowError(BadDataError):
    """A ULEB128 value or a collection length is above the allowed maximum."""


class MapNotCanonicallyOrderedError(BadDataError):
    """Map entries or set members are not sorted by the bytes of their encoded keys."""


class DuplicateKeyError(BadDataError):
    pass


class TrailingDataError(BadDataError):
    pass


class RecursionLimitExceededError(SerializationError):
    """The value nests more named containers than the configured maximum depth."""


class SinkExhaustedError(SerializationError):
    """ A capped sink (or source) reached its maximum size.

    After this exception is raised the sink cannot be used anymore, the bytes written so far are not a valid
    encoding of anything.
    """
