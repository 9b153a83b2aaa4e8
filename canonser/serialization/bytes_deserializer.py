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

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import UnexpectedEndOfInputError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """ Source over an in-memory byte sequence.

    The state is the buffer and an offset into it, reads return views of the buffer and move the offset forward.
    Decoders copy what they keep, so values never share memory with the input.
    """

    def __init__(self, data: Buffer) -> None:
        self._data = memoryview(data).cast('B')
        self._pos = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('cannot read a negative number of bytes')
        if exact and n > self.remaining():
            raise UnexpectedEndOfInputError(f'not enough bytes to read at position {self._pos}')
        return self._data[self._pos:self._pos + n]

    @override
    def peek_byte(self) -> int:
        if self._pos >= len(self._data):
            raise UnexpectedEndOfInputError(f'not enough bytes to read at position {self._pos}')
        return self._data[self._pos]

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        data = self.peek_bytes(n, exact=exact)
        self._pos += len(data)
        return data

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._pos += 1
        return b
