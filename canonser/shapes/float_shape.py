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
from canonser.serialization.encoding.float import check_float, decode_float, encode_float
from canonser.shapes.shape import Shape
from canonser.utils.typing import is_subclass


class _FloatShape(Shape[float]):
    """ Base class for IEEE-754 floats, values are encoded bit-for-bit, NaN included.
    """

    _is_hashable = True
    # XXX: subclass must define this value:
    _byte_size: ClassVar[int]

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: Shape.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, float):
            raise TypeError('expected float')
        check_float(value, length=self._byte_size)

    @override
    def _serialize(self, serializer: Serializer, value: float, /, *, depth: int) -> None:
        encode_float(serializer, value, length=self._byte_size)

    @override
    def _deserialize(self, deserializer: Deserializer, /, *, depth: int) -> float:
        return decode_float(deserializer, length=self._byte_size)


class F32Shape(_FloatShape):
    _byte_size = 4


class F64Shape(_FloatShape):
    _byte_size = 8
