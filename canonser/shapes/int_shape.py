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

from typing import ClassVar

from typing_extensions import Self, override

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.int import decode_int, encode_int
from canonser.shapes.shape import Shape
from canonser.utils.typing import is_subclass


class _SizedIntShape(Shape[int]):
    """ Fixed width little-endian integers, one subclass per width and signedness.

    >>> U16Shape().to_bytes(0x1234).hex()
    '3412'
    >>> I8Shape().from_bytes(b'\\xff')
    -1
    >>> try:
    ...     U8Shape().to_bytes(256)
    ... except ValueError as e:
    ...     print(*e.args)
    256 is above the upper bound of uint8
    """

    _is_hashable = True
    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]

    @classmethod
    def _type_name(cls) -> str:
        return f'{"" if cls._signed else "u"}int{cls._byte_size * 8}'

    @classmethod
    def _upper_bound_value(cls) -> int:
        if cls._signed:
            return 2**(cls._byte_size * 8 - 1) - 1
        else:
            return 2**(cls._byte_size * 8) - 1

    @classmethod
    def _lower_bound_value(cls) -> int:
        if cls._signed:
            return -(2**(cls._byte_size * 8 - 1))
        else:
            return 0

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: Shape.TypeMap) -> Self:
        if not is_subclass(type_, int):
            raise TypeError('expected int type')
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        # XXX: bool is a subclass of int, but True is not a number as far as this codec is concerned
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError('expected integer')
        self._check_range(value)

    def _check_range(self, value: int) -> None:
        if value > self._upper_bound_value():
            raise ValueError(f'{value} is above the upper bound of {self._type_name()}')
        if value < self._lower_bound_value():
            raise ValueError(f'{value} is below the lower bound of {self._type_name()}')

    @override
    def _serialize(self, serializer: Serializer, value: int, /, *, depth: int) -> None:
        encode_int(serializer, value, length=self._byte_size, signed=self._signed)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> int:
        return decode_int(deserializer, length=self._byte_size, signed=self._signed)


class U8Shape(_SizedIntShape):
    _signed = False
    _byte_size = 1


class U16Shape(_SizedIntShape):
    _signed = False
    _byte_size = 2


class U32Shape(_SizedIntShape):
    _signed = False
    _byte_size = 4


class U64Shape(_SizedIntShape):
    _signed = False
    _byte_size = 8


class U128Shape(_SizedIntShape):
    _signed = False
    _byte_size = 16


class I8Shape(_SizedIntShape):
    _signed = True
    _byte_size = 1


class I16Shape(_SizedIntShape):
    _signed = True
    _byte_size = 2


class I32Shape(_SizedIntShape):
    _signed = True
    _byte_size = 4


class I64Shape(_SizedIntShape):
    _signed = True
    _byte_size = 8


class I128Shape(_SizedIntShape):
    _signed = True
    _byte_size = 16
