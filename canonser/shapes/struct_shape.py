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

"""
Structs are modeled with dataclasses, fields are encoded in declaration order with no framing, a dataclass with no
fields is a unit struct and is encoded as zero bytes.

A dataclass can refer to itself, directly or through a container, as long as the recursion ends on a value, usually an
`Optional` or an empty collection:

>>> from dataclasses import dataclass
>>> from typing import Optional
>>> from canonser.shapes import make_shape
>>> from canonser.types import uint8
>>> @dataclass
... class Node:
...     value: uint8
...     next: Optional['Node']
>>> shape = make_shape(Node)
>>> shape.to_bytes(Node(1, Node(2, None))).hex()
'01010200'
>>> shape.from_bytes(bytes.fromhex('01010200'))
Node(value=1, next=Node(value=2, next=None))
"""

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding import next_container_depth
from canonser.shapes.shape import Shape

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

D = TypeVar('D', bound='DataclassInstance')


class StructShape(Shape[D]):
    """ Represents dataclass instances.

    Each dataclass counts as one level of nesting.
    """

    __slots__ = ('_is_hashable', '_fields', '_class')
    _fields: dict[str, Shape]
    _class: type[D]

    def __init__(self, class_: type[D], fields_: dict[str, Shape] | None = None) -> None:
        self._class = class_
        # XXX: the order is important, `dict` keeps the declaration order
        self._fields = fields_ if fields_ is not None else {}
        self._is_hashable = getattr(class_, '__hash__', None) is not None

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: Shape.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError(f'expected a dataclass, got {type_!r}')
        existing = type_map.named_shapes.get(type_)
        if existing is not None:
            assert isinstance(existing, cls)
            return existing
        # XXX: registered before the fields are built, so the fields can refer back to this shape
        shape = cls(type_)
        type_map.named_shapes[type_] = shape
        # XXX: the class itself is made visible so it can refer to itself even when defined inside a function
        hints = get_type_hints(type_, localns={type_.__name__: type_})
        for field in fields(type_):
            if not field.init:
                raise TypeError(f'{type_.__name__}.{field.name}: fields with init=False are not supported')
            shape._fields[field.name] = Shape.from_type(hints[field.name], type_map=type_map)
        return shape

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance')
        if deep:
            for field_name, field_shape in self._fields.items():
                field_shape._check_value(getattr(value, field_name), deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: D, /, *, depth: int) -> None:
        depth = next_container_depth(depth, serializer.max_container_depth)
        self._serialize_fields(serializer, value, depth=depth)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> D:
        depth = next_container_depth(depth, deserializer.max_container_depth)
        return self._deserialize_fields(deserializer, depth=depth)

    def _serialize_fields(self, serializer: Serializer, value: D, /, *, depth: int) -> None:
        """ Encode the fields only, `depth` is the depth of the fields. Used directly by enum variants."""
        for field_name, field_shape in self._fields.items():
            field_shape.serialize(serializer, getattr(value, field_name), depth=depth)

    def _deserialize_fields(self, deserializer: Deserializer, /, *, depth: int) -> D:
        """ Decode the fields only, `depth` is the depth of the fields. Used directly by enum variants."""
        kwargs: dict[str, Any] = {}
        for field_name, field_shape in self._fields.items():
            kwargs[field_name] = field_shape.deserialize(deserializer, depth=depth)
        return self._class(**kwargs)
