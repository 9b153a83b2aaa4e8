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
Enums (see `canonser.types.SumType`) are encoded as the tag of the active variant followed by the variant's fields.

>>> from dataclasses import dataclass
>>> from canonser.shapes import make_shape
>>> from canonser.types import SumType, uint16
>>> class Message(SumType):
...     pass
>>> @dataclass
... class Ping(Message):
...     pass
>>> @dataclass
... class Data(Message, tag=130):
...     payload: bytes
...     port: uint16
>>> shape = make_shape(Message)
>>> shape.to_bytes(Ping()).hex()
'00'
>>> shape.to_bytes(Data(b'hi', 80)).hex()
'82010268695000'
>>> shape.from_bytes(bytes.fromhex('82010268695000'))
Data(payload=b'hi', port=80)
"""

from functools import partial
from typing import TypeVar

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding import next_container_depth
from canonser.serialization.compound_encoding.variant import decode_variant, encode_variant
from canonser.shapes.shape import Shape
from canonser.shapes.struct_shape import StructShape
from canonser.types import SumType

S = TypeVar('S', bound=SumType)


class SumShape(Shape[S]):
    """ Represents an enum whose variants are dataclasses.

    The enum counts as one level of nesting, the variant's fields are one level below it.
    """

    __slots__ = ('_is_hashable', '_enum', '_tags', '_variants')

    _enum: type[S]
    _tags: dict[int, StructShape]
    _variants: dict[type, tuple[int, StructShape]]

    def __init__(self, enum: type[S]) -> None:
        self._enum = enum
        self._tags = {}
        self._variants = {}
        self._is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[S], /, *, type_map: Shape.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, SumType) or type_ is SumType:
            raise TypeError('expected a SumType enum')
        if SumType not in type_.__bases__:
            raise TypeError(f'{type_.__name__} is a variant of {type_.sum_type().__name__}, use the enum as the type')
        existing = type_map.named_shapes.get(type_)
        if existing is not None:
            assert isinstance(existing, cls)
            return existing
        shape = cls(type_)
        type_map.named_shapes[type_] = shape
        for tag, variant in type_.variants().items():
            variant_shape = StructShape._from_type(variant, type_map=type_map)
            shape._tags[tag] = variant_shape
            shape._variants[variant] = (tag, variant_shape)
        shape._is_hashable = all(variant_shape.is_hashable() for variant_shape in shape._tags.values())
        return shape

    @override
    def _check_value(self, value: S, /, *, deep: bool) -> None:
        entry = self._variants.get(type(value))
        if entry is None:
            raise TypeError(f'expected a variant of {self._enum.__name__}')
        if deep:
            _, variant_shape = entry
            variant_shape._check_value(value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: S, /, *, depth: int) -> None:
        depth = next_container_depth(depth, serializer.max_container_depth)
        tag, variant_shape = self._variants[type(value)]
        encode_variant(serializer, tag, value, partial(variant_shape._serialize_fields, depth=depth))

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> S:
        depth = next_container_depth(depth, deserializer.max_container_depth)
        decoders = {
            tag: partial(variant_shape._deserialize_fields, depth=depth)
            for tag, variant_shape in self._tags.items()
        }
        return decode_variant(deserializer, decoders)
