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
A source adapter that remembers every byte consumed through it.

Map and set decoding use it to get the exact encoded bytes of each key, the canonical order is defined over those
bytes and not over the decoded keys.

>>> de = Deserializer.build_bytes_deserializer(b'\x03abcrest')
>>> tracker = de.with_tracking()
>>> n = tracker.read_byte()
>>> bytes(tracker.read_bytes(n))
b'abc'
>>> tracker.consumed()
b'\x03abc'
>>> bytes(de.read_all())
b'rest'
"""

from typing import TypeVar

from typing_extensions import override

from canonser.serialization.deserializer import Deserializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter

D = TypeVar('D', bound=Deserializer)


class TrackingDeserializer(GenericDeserializerAdapter[D]):
    def __init__(self, deserializer: D) -> None:
        super().__init__(deserializer)
        self._consumed = bytearray()

    def consumed(self) -> bytes:
        """All the bytes read through this adapter so far, in order."""
        return bytes(self._consumed)

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        data = super().read_bytes(n, exact=exact)
        self._consumed += memoryview(data)
        return data
