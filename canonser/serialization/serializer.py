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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, overload

from typing_extensions import Self

from .consts import MAX_CONTAINER_DEPTH, MAX_SEQUENCE_LENGTH
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesSerializer
    from .bytes_serializer import BytesSerializer


class Serializer(ABC):
    """ Position-tracked byte sink.

    Implementations only need `cur_pos` and `write_bytes`, single byte writes go through `write_bytes`, so an adapter
    that overrides it sees every byte written.

    Besides the bytes, a sink carries the limits that encoders must respect while writing to it.
    """

    max_container_depth: int = MAX_CONTAINER_DEPTH
    max_sequence_length: int = MAX_SEQUENCE_LENGTH

    @staticmethod
    def build_bytes_serializer(
        *,
        max_container_depth: int = MAX_CONTAINER_DEPTH,
        max_sequence_length: int = MAX_SEQUENCE_LENGTH,
    ) -> BytesSerializer:
        """Create an in-memory sink with the given limits."""
        from .bytes_serializer import BytesSerializer
        serializer = BytesSerializer()
        serializer.max_container_depth = max_container_depth
        serializer.max_sequence_length = max_sequence_length
        return serializer

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes written so far."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        raise NotImplementedError

    def write_byte(self, data: int) -> None:
        """Write a single byte, `data` must be in `range(256)`."""
        self.write_bytes(bytes((data,)))

    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the sink cannot be used after this."""
        raise TypeError(f'{type(self).__name__} does not hold its output')

    def with_max_bytes(self, max_bytes: int) -> MaxBytesSerializer[Self]:
        """Wrap this sink so that writing more than `max_bytes` through it raises `SinkExhaustedError`."""
        from .adapters import MaxBytesSerializer
        return MaxBytesSerializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesSerializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: int | None) -> Self | MaxBytesSerializer[Self]:
        """Same as `with_max_bytes`, but `None` means no cap and returns the sink itself."""
        if max_bytes is None:
            return self
        return self.with_max_bytes(max_bytes)
