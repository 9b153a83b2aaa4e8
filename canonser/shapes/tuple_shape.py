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

from typing import Any, Optional, get_args

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding.collection import decode_collection, encode_collection
from canonser.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from canonser.shapes.shape import Shape


class TupleShape(Shape[tuple]):
    """ Python tuples play two roles, so this shape has two encodings.

    - `tuple[T, ...]` is a sequence, encoded exactly like `list[T]`;
    - `tuple[A, B, ...]` with a fixed number of fields is an anonymous product, the fields are concatenated without any
      prefix, so `tuple[()]` takes zero bytes.

    Either way the decoded value is a tuple, and a list of the right length is accepted when encoding.
    """

    __slots__ = ('_is_hashable', '_items', '_fields')

    # only one of them is set
    _items: Optional[Shape]
    _fields: tuple[Shape, ...]

    def __init__(self, *, items: Optional[Shape] = None, fields: tuple[Shape, ...] = ()) -> None:
        if items is not None and fields:
            raise ValueError('a tuple shape has either items or fields, not both')
        self._items = items
        self._fields = fields
        if items is not None:
            self._is_hashable = items.is_hashable()
        else:
            self._is_hashable = all(field.is_hashable() for field in fields)

    @classmethod
    def of_items(cls, items: Shape, /) -> Self:
        """ Shape of a `tuple[T, ...]`."""
        return cls(items=items)

    @classmethod
    def of_fields(cls, *fields: Shape) -> Self:
        """ Shape of a fixed size tuple."""
        return cls(fields=fields)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: Shape.TypeMap) -> Self:
        args = get_args(type_)
        if args and args[-1] is Ellipsis:
            if len(args) != 2:
                raise TypeError('ellipsis is only allowed as tuple[<item type>, ...]')
            item_type, _ellipsis = args
            return cls.of_items(Shape.from_type(item_type, type_map=type_map))
        # a bare `tuple` has no arguments either, but it isn't `tuple[()]`
        if type_ is tuple:
            raise TypeError('expected tuple[<field types...>] or tuple[<item type>, ...]')
        return cls.of_fields(*(Shape.from_type(arg, type_map=type_map) for arg in args))

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise TypeError(f'expected tuple, got {type(value).__name__}')
        if self._items is not None:
            if deep:
                for item in value:
                    self._items._check_value(item, deep=True)
            return
        if len(value) != len(self._fields):
            raise TypeError(f'expected a tuple of {len(self._fields)} fields, got {len(value)}')
        if deep:
            for field_value, field in zip(value, self._fields):
                field._check_value(field_value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /, *, depth: int) -> None:
        if self._items is not None:
            encode_collection(serializer, value, self._items.encoder(depth))
        else:
            encode_tuple(serializer, tuple(value), tuple(field.encoder(depth) for field in self._fields))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> tuple[Any, ...]:
        if self._items is not None:
            return decode_collection(deserializer, self._items.decoder(depth), tuple)
        return decode_tuple(deserializer, tuple(field.decoder(depth) for field in self._fields))
