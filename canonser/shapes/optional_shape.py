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

from types import NoneType
from typing import TypeVar, get_args

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding.optional import decode_optional, encode_optional
from canonser.shapes.shape import Shape
from canonser.shapes.utils import pretty_type
from canonser.utils.typing import is_union

V = TypeVar('V')


class OptionalShape(Shape[V | None]):
    """ `T | None`, written as a presence byte followed by the value when there is one.

    `Optional[Optional[T]]` is the same annotation as `Optional[T]` in Python, so an option can't directly hold
    another option.
    """

    __slots__ = ('_is_hashable', '_inner')

    _inner: Shape[V]

    def __init__(self, inner: Shape[V]) -> None:
        self._inner = inner
        self._is_hashable = inner.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: Shape.TypeMap) -> Self:
        args = get_args(type_) if is_union(type_) else ()
        others = [arg for arg in args if arg is not NoneType]
        if len(args) != 2 or len(others) != 1:
            raise TypeError(f'expected `T | None`, got {pretty_type(type_)}')
        inner_type, = others
        return cls(Shape.from_type(inner_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is not None and deep:
            self._inner._check_value(value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /, *, depth: int) -> None:
        encode_optional(serializer, value, self._inner.encoder(depth))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> V | None:
        return decode_optional(deserializer, self._inner.decoder(depth))
