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

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.bool import decode_bool, encode_bool
from canonser.shapes.shape import Shape


class BoolShape(Shape[bool]):
    """ `bool` is a single byte, 0 or 1, any other byte is rejected when decoding.

    An `int` is not accepted in place of a bool even though `bool` is a subclass of `int`.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[bool], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is bool:
            return cls()
        raise TypeError(f'expected bool, got {type_!r}')

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if value is not True and value is not False:
            raise TypeError(f'expected bool, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: bool, /, *, depth: int) -> None:
        encode_bool(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> bool:
        return decode_bool(deserializer)
