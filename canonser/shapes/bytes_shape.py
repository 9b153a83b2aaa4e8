#  Copyright 2025 Hathor Labs
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

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.bytes import decode_bytes, encode_bytes
from canonser.shapes.shape import Shape


class BytesShape(Shape[bytes]):
    """ Represents builtin `bytes` values, `bytearray` values are accepted and decoded as `bytes`.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not bytes:
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError('expected bytes instance')

    @override
    def _serialize(self, serializer: Serializer, value: bytes, /, *, depth: int) -> None:
        encode_bytes(serializer, bytes(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> bytes:
        return decode_bytes(deserializer)
