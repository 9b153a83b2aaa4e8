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

from typing import TypeVar, get_type_hints

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding import next_container_depth
from canonser.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from canonser.shapes.shape import Shape

N = TypeVar('N', bound=tuple)


class NamedTupleShape(Shape[N]):
    """ Tuple structs are modeled with `typing.NamedTuple`, fields are positional and concatenated in order.

    Each NamedTuple class counts as one level of nesting. A plain tuple of the right length is accepted when encoding,
    decoding always builds the NamedTuple class.
    """

    __slots__ = ('_is_hashable', '_fields', '_class')

    _fields: tuple[Shape, ...]
    _class: type[N]

    def __init__(self, class_: type[N]) -> None:
        self._class = class_
        self._fields = ()
        # XXX: fixed once the fields are built
        self._is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: Shape.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, tuple) or not hasattr(type_, '_fields'):
            raise TypeError(f'expected a NamedTuple class, got {type_!r}')
        existing = type_map.named_shapes.get(type_)
        if existing is not None:
            assert isinstance(existing, cls)
            return existing
        shape = cls(type_)
        type_map.named_shapes[type_] = shape
        hints = get_type_hints(type_, localns={type_.__name__: type_})
        shape._fields = tuple(Shape.from_type(hints[name], type_map=type_map) for name in type_._fields)
        shape._is_hashable = all(field.is_hashable() for field in shape._fields)
        return shape

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise TypeError(f'expected {self._class.__name__} or tuple, got {type(value).__name__}')
        if len(value) != len(self._fields):
            raise TypeError(f'{self._class.__name__} has {len(self._fields)} fields, got {len(value)} values')
        if not deep:
            return
        for field_value, field in zip(value, self._fields):
            field._check_value(field_value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: N, /, *, depth: int) -> None:
        depth = next_container_depth(depth, serializer.max_container_depth)
        encoders = tuple(field.encoder(depth) for field in self._fields)
        encode_tuple(serializer, tuple(value), encoders)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> N:
        depth = next_container_depth(depth, deserializer.max_container_depth)
        decoders = tuple(field.decoder(depth) for field in self._fields)
        return self._class(*decode_tuple(deserializer, decoders))
