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

r"""
A capped sink: writing more than `max_bytes` through the adapter raises `SinkExhaustedError`.

>>> se = Serializer.build_bytes_serializer().with_max_bytes(3)
>>> se.write_bytes(b'ab')
>>> se.write_byte(0x63)
>>> bytes(se.finalize())
b'abc'

>>> se = Serializer.build_bytes_serializer().with_max_bytes(3)
>>> se.write_bytes(b'ab')
>>> try:
...     se.write_bytes(b'cd')
... except SinkExhaustedError as e:
...     print(*e.args)
sink exhausted: 1 bytes left, 2 requested
"""

from typing import TypeVar

from typing_extensions import override

from canonser.serialization.deserializer import Deserializer
from canonser.serialization.exceptions import SinkExhaustedError
from canonser.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)

MaxBytesExceededError = SinkExhaustedError


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        if max_bytes < 0:
            raise ValueError('max_bytes cannot be negative')
        self._bytes_left = max_bytes

    @override
    def write_bytes(self, data: Buffer) -> None:
        size = memoryview(data).nbytes
        if size > self._bytes_left:
            raise SinkExhaustedError(f'sink exhausted: {self._bytes_left} bytes left, {size} requested')
        self._bytes_left -= size
        super().write_bytes(data)


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    """ A capped source: reading more than `max_bytes` through the adapter raises `SinkExhaustedError`.

    >>> de = Deserializer.build_bytes_deserializer(b'abcd').with_max_bytes(3)
    >>> bytes(de.read_bytes(2))
    b'ab'
    >>> try:
    ...     de.read_bytes(2)
    ... except SinkExhaustedError as e:
    ...     print(*e.args)
    source exhausted: 1 bytes left, 2 requested
    >>> bytes(de.read_all())
    b'c'
    """

    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        if max_bytes < 0:
            raise ValueError('max_bytes cannot be negative')
        self._bytes_left = max_bytes

    @override
    def remaining(self) -> int:
        return min(super().remaining(), self._bytes_left)

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        if n > self._bytes_left:
            if exact:
                raise SinkExhaustedError(f'source exhausted: {self._bytes_left} bytes left, {n} requested')
            n = self._bytes_left
        data = super().read_bytes(n, exact=exact)
        self._bytes_left -= memoryview(data).nbytes
        return data
