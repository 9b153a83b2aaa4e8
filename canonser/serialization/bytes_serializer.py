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

from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """In-memory sink, the output grows in a single `bytearray`."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @override
    def cur_pos(self) -> int:
        return len(self._buffer)

    @override
    def write_byte(self, data: int) -> None:
        # bytearray.append checks the range
        self._buffer.append(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        # the data is copied, changing a mutable buffer afterwards does not change the output
        self._buffer += memoryview(data)

    @override
    def finalize(self) -> bytes:
        data = bytes(self._buffer)
        del self._buffer
        return data
