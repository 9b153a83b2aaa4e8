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

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, overload

from typing_extensions import Self

from .consts import MAX_CONTAINER_DEPTH, MAX_SEQUENCE_LENGTH
from .exceptions import TrailingDataError
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesDeserializer, TrackingDeserializer
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    """ Position-tracked byte source with bounds checking.

    Implementations provide `cur_pos`, `remaining`, `peek_bytes` and `read_bytes`, every other read is expressed with
    those, so an adapter that overrides `read_bytes` sees every byte consumed. An exact read past the end raises
    `UnexpectedEndOfInputError`.

    A source carries the same limits as `Serializer`.
    """

    max_container_depth: int = MAX_CONTAINER_DEPTH
    max_sequence_length: int = MAX_SEQUENCE_LENGTH

    @staticmethod
    def build_bytes_deserializer(
        data: Buffer,
        *,
        max_container_depth: int = MAX_CONTAINER_DEPTH,
        max_sequence_length: int = MAX_SEQUENCE_LENGTH,
    ) -> BytesDeserializer:
        """Create a source over an in-memory byte sequence with the given limits."""
        from .bytes_deserializer import BytesDeserializer
        deserializer = BytesDeserializer(data)
        deserializer.max_container_depth = max_container_depth
        deserializer.max_sequence_length = max_sequence_length
        return deserializer

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes consumed so far."""
        raise NotImplementedError

    @abstractmethod
    def remaining(self) -> int:
        """Number of bytes that can still be read."""
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Like `read_bytes`, but the bytes are not consumed."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Read `n` bytes, with `exact=False` fewer bytes are returned when the source runs out."""
        raise NotImplementedError

    def is_empty(self) -> bool:
        return self.remaining() == 0

    def peek_byte(self) -> int:
        return bytes(self.peek_bytes(1))[0]

    def read_byte(self) -> int:
        """Read a single byte as an unsigned int."""
        return bytes(self.read_bytes(1))[0]

    def read_all(self) -> Buffer:
        """Read everything that is left."""
        return self.read_bytes(self.remaining(), exact=False)

    def read_struct(self, format: str) -> tuple[Any, ...]:
        data = self.read_bytes(struct.calcsize(format))
        return struct.unpack(format, data)

    def finalize(self) -> None:
        """Check that the input was fully consumed, anything left is a `TrailingDataError`."""
        left = self.remaining()
        if left:
            raise TrailingDataError(f'trailing data: {left} bytes left at position {self.cur_pos()}')

    def with_tracking(self) -> TrackingDeserializer[Self]:
        """Wrap this source so that the bytes consumed through the wrapper are recorded."""
        from .adapters import TrackingDeserializer
        return TrackingDeserializer(self)

    def with_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        """Wrap this source so that reading more than `max_bytes` through it raises `SinkExhaustedError`."""
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: int | None) -> Self | MaxBytesDeserializer[Self]:
        """Same as `with_max_bytes`, but `None` means no cap and returns the source itself."""
        if max_bytes is None:
            return self
        return self.with_max_bytes(max_bytes)
