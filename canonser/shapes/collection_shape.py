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

from collections.abc import Hashable, Iterable, Set
from typing import Callable, ClassVar, TypeVar

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding.collection import decode_collection, encode_collection
from canonser.serialization.compound_encoding.mapping import decode_set, encode_set
from canonser.shapes.shape import Shape
from canonser.shapes.utils import check_hashable, unpack_type_args

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class ListShape(Shape[list[T]]):
    """ A `list[T]` is a sequence: the number of items followed by each item, in order.
    """

    __slots__ = ('_item',)

    _is_hashable = False
    _item: Shape[T]

    def __init__(self, item: Shape[T], /) -> None:
        self._item = item

    @override
    @classmethod
    def _from_type(cls, type_: type[list[T]], /, *, type_map: Shape.TypeMap) -> Self:
        item_type, = unpack_type_args(type_, list, 'list[<item type>]')
        return cls(Shape.from_type(item_type, type_map=type_map))

    @override
    def _check_value(self, value: list[T], /, *, deep: bool) -> None:
        if not isinstance(value, list):
            raise TypeError(f'expected list, got {type(value).__name__}')
        if deep:
            for item in value:
                self._item._check_value(item, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: list[T], /, *, depth: int) -> None:
        encode_collection(serializer, value, self._item.encoder(depth))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> list[T]:
        return decode_collection(deserializer, self._item.decoder(depth), list)


class SetShape(Shape[Set[H]]):
    """ A `set[T]` is encoded like a list whose members are sorted by their encoded bytes.

    Decoding rejects members that are out of order or repeated, so a set has exactly one encoding.
    """

    __slots__ = ('_member',)

    _is_hashable = False
    _member: Shape[H]
    _origin: ClassVar[type] = set
    _builder: ClassVar[Callable[[Iterable], Set]] = set

    def __init__(self, member: Shape[H], /) -> None:
        self._member = member

    @override
    @classmethod
    def _from_type(cls, type_: type[Set[H]], /, *, type_map: Shape.TypeMap) -> Self:
        member_type, = unpack_type_args(type_, cls._origin, f'{cls._origin.__name__}[<member type>]')
        check_hashable(member_type)
        return cls(Shape.from_type(member_type, type_map=type_map))

    @override
    def _check_value(self, value: Set[H], /, *, deep: bool) -> None:
        if not isinstance(value, Set):
            raise TypeError(f'expected {self._origin.__name__}, got {type(value).__name__}')
        if deep:
            for member in value:
                self._member._check_value(member, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Set[H], /, *, depth: int) -> None:
        encode_set(serializer, value, self._member.encoder(depth))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> Set[H]:
        return decode_set(deserializer, self._member.decoder(depth), type(self)._builder)


class FrozenSetShape(SetShape[H]):
    """ Same encoding as `SetShape`, decoded as a `frozenset`, which can itself be a key or a member.
    """

    _is_hashable = True
    _origin = frozenset
    _builder = frozenset
