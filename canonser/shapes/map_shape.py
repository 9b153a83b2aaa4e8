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

from collections.abc import Hashable, Mapping
from typing import TypeVar

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from canonser.shapes.shape import Shape
from canonser.shapes.utils import check_hashable, unpack_type_args

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class DictShape(Shape[Mapping[K, V]]):
    """ A `dict[K, V]`, encoded as the number of entries followed by each key and its value.

    Entries are written in the order of each key's encoded bytes, whatever the insertion order of the dict was, and
    decoding rejects keys that are out of order or repeated.
    """

    __slots__ = ('_key', '_value')

    _is_hashable = False
    _key: Shape[K]
    _value: Shape[V]

    def __init__(self, key: Shape[K], value: Shape[V]) -> None:
        self._key = key
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[K, V]], /, *, type_map: Shape.TypeMap) -> Self:
        key_type, value_type = unpack_type_args(type_, dict, 'dict[<key type>, <value type>]', count=2)
        check_hashable(key_type)
        return cls(Shape.from_type(key_type, type_map=type_map), Shape.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: Mapping[K, V], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError(f'expected dict, got {type(value).__name__}')
        if not deep:
            return
        for key, item in value.items():
            self._key._check_value(key, deep=True)
            self._value._check_value(item, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[K, V], /, *, depth: int) -> None:
        encode_mapping(serializer, value, self._key.encoder(depth), self._value.encoder(depth))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> dict[K, V]:
        return decode_mapping(deserializer, self._key.decoder(depth), self._value.decoder(depth), dict)
