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

from abc import ABC, abstractmethod
from functools import partial
from typing import Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.compound_encoding import Decoder, Encoder
from canonser.serialization.consts import MAX_CONTAINER_DEPTH, MAX_SEQUENCE_LENGTH
from canonser.shapes.utils import TypeAliasMap, TypeToShapeMap, get_aliased_type, get_usable_origin_type

T = TypeVar('T')


class Shape(ABC, Generic[T]):
    """ The codec of one Python type, built from its annotation.

    A shape is built once from an annotation (see `Shape.from_type` and `canonser.shapes.make_shape`) and never
    changes afterwards, the same instance can encode and decode any number of values, from any number of threads.

    Named types (dataclasses, NamedTuples and enums) are the only types that can refer to themselves, so they are the
    only ones that count towards the `depth` passed along by `serialize` and `deserialize`. Going deeper than the
    cursor's `max_container_depth` raises a `RecursionLimitExceededError`.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        shapes_map: TypeToShapeMap
        # shapes of named types already (or being) built, this is what makes recursive types possible
        named_shapes: dict[type, Shape]

    # XXX: subclasses with state must declare their own slots
    __slots__ = ()

    # XXX: set by every subclass, either as a class attribute or in __init__
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> Shape[T]:
        """ Build the shape of an annotation.

        Types found in `type_map.alias_map` are replaced first, then the Shape class is looked up in
        `type_map.shapes_map`. A TypeError is raised for anything that can't be encoded.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map, _verbose=False)
        shape_class = type_map.shapes_map[usable_origin]
        return shape_class._from_type(get_aliased_type(type_, type_map.alias_map), type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Build this shape from an already aliased annotation.

        Compound shapes look at the annotation's arguments and call `Shape.from_type` on them with the same
        `type_map`.
        """
        raise TypeError(f'{cls.__name__} cannot be built from a type annotation')

    @final
    def is_hashable(self) -> bool:
        """ Whether the values are hashable, only those can be dict keys or set members."""
        return self._is_hashable

    @final
    def check_value(self, value: T, /) -> None:
        """ Check a whole value, nested values included.

        A TypeError means the value doesn't have the right type, a ValueError means it has the right type but can't be
        encoded, like an int that doesn't fit in its width.
        """
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /, *, depth: int = 0) -> None:
        """ Write a value, `depth` is the number of named types it is nested in.

        Every level checks its own value before writing it, there is no need to call `check_value` first.
        """
        self._check_value(value, deep=False)
        self._serialize(serializer, value, depth=depth)

    @final
    def deserialize(self, deserializer: Deserializer, /, *, depth: int = 0) -> T:
        """ Read a value, `depth` is the number of named types it is nested in."""
        value = self._deserialize(deserializer, depth=depth)
        # XXX: decoding only builds valid values, this only catches bugs in a Shape class
        self._check_value(value, deep=False)
        return value

    @final
    def encoder(self, depth: int) -> Encoder[T]:
        """ `serialize` bound to a depth, to be passed to compound encoders."""
        return partial(self.serialize, depth=depth)

    @final
    def decoder(self, depth: int) -> Decoder[T]:
        """ `deserialize` bound to a depth, to be passed to compound decoders."""
        return partial(self.deserialize, depth=depth)

    @final
    def to_bytes(
        self,
        value: T,
        /,
        *,
        max_container_depth: int = MAX_CONTAINER_DEPTH,
        max_sequence_length: int = MAX_SEQUENCE_LENGTH,
    ) -> bytes:
        """ Encode a value into a new bytes object.
        """
        serializer = Serializer.build_bytes_serializer(
            max_container_depth=max_container_depth,
            max_sequence_length=max_sequence_length,
        )
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(
        self,
        data: bytes,
        /,
        *,
        max_container_depth: int = MAX_CONTAINER_DEPTH,
        max_sequence_length: int = MAX_SEQUENCE_LENGTH,
    ) -> T:
        """ Decode a value that must take the whole input, a `TrailingDataError` is raised otherwise.
        """
        deserializer = Deserializer.build_bytes_deserializer(
            data,
            max_container_depth=max_container_depth,
            max_sequence_length=max_sequence_length,
        )
        result = self.deserialize(deserializer)
        deserializer.finalize()
        return result

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Check the value of this level, and of every nested level when `deep` is set.

        `serialize` calls this with `deep=False` at each level as it goes down, so nothing is checked twice. Compound
        shapes call `_check_value` of their inner shapes, never `check_value`.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /, *, depth: int) -> None:
        """ Write a value whose own level was already checked.

        Inner values must go through the inner shape's `encoder(depth)`, so they are checked on the way down too.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> T:
        raise NotImplementedError
