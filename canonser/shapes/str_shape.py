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
from canonser.serialization.encoding.utf8 import decode_utf8, encode_utf8
from canonser.shapes.shape import Shape


class StrShape(Shape[str]):
    """ Represents builtin `str` values.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: Shape.TypeMap) -> Self:
        if type_ is not str:
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str type')
        # XXX: a Python str can hold lone surrogates, which have no UTF-8 encoding
        try:
            value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValueError(f'string is not valid unicode: {e.reason} at position {e.start}') from e

    @override
    def _serialize(self, serializer: Serializer, value: str, /, *, depth: int) -> None:
        encode_utf8(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> str:
        return decode_utf8(deserializer)
