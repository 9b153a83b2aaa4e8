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
Adapters wrap a sink or a source to change how it behaves, without the encoders knowing about it.

The generic adapters forward everything to the wrapped cursor (`inner`) and copy its limits, subclasses override
`write_bytes` or `read_bytes`, which every other write and read goes through.
"""

from typing import Generic, TypeVar

from typing_extensions import override

from canonser.serialization.deserializer import Deserializer
from canonser.serialization.serializer import Serializer

from ..types import Buffer

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class GenericSerializerAdapter(Serializer, Generic[S]):
    inner: S

    def __init__(self, serializer: S) -> None:
        self.inner = serializer
        self.max_container_depth = serializer.max_container_depth
        self.max_sequence_length = serializer.max_sequence_length

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def write_bytes(self, data: Buffer) -> None:
        self.inner.write_bytes(data)

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()


class GenericDeserializerAdapter(Deserializer, Generic[D]):
    inner: D

    def __init__(self, deserializer: D) -> None:
        self.inner = deserializer
        self.max_container_depth = deserializer.max_container_depth
        self.max_sequence_length = deserializer.max_sequence_length

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def remaining(self) -> int:
        return self.inner.remaining()

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        return self.inner.peek_bytes(n, exact=exact)

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        return self.inner.read_bytes(n, exact=exact)

    @override
    def finalize(self) -> None:
        self.inner.finalize()
