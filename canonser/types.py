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

"""
Annotations understood by the codec on top of the builtin types.

Python has a single `int` and a single `float`, these NewTypes select the width (and signedness) used when encoding.
They have no runtime cost, `uint8(3)` is just `3`.

Enums with data are modeled with `SumType`:

>>> from dataclasses import dataclass
>>> class Figure(SumType):
...     pass
>>> @dataclass
... class Circle(Figure):
...     radius: uint32
>>> @dataclass
... class Rect(Figure, tag=5):
...     width: uint32
...     height: uint32
>>> @dataclass
... class Empty(Figure):
...     pass
>>> [(tag, variant.__name__) for tag, variant in Figure.variants().items()]
[(0, 'Circle'), (5, 'Rect'), (6, 'Empty')]
>>> Rect.variant_tag()
5
>>> Rect.sum_type() is Figure
True
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, ClassVar, NewType

from canonser.serialization.consts import MAX_U32

uint8 = NewType('uint8', int)
uint16 = NewType('uint16', int)
uint32 = NewType('uint32', int)
uint64 = NewType('uint64', int)
uint128 = NewType('uint128', int)
int8 = NewType('int8', int)
int16 = NewType('int16', int)
int32 = NewType('int32', int)
int64 = NewType('int64', int)
int128 = NewType('int128', int)
float32 = NewType('float32', float)
float64 = NewType('float64', float)
# a str with exactly one code point
char = NewType('char', str)


class SumType:
    """ Base class for enums whose variants carry data.

    A class that derives directly from `SumType` is an enum, each class that derives directly from the enum is one of
    its variants and is expected to be a dataclass (a dataclass with no fields is a unit variant). Values of the enum
    are instances of its variants.

    A variant's tag is given with `class Variant(Enum, tag=N)`, when omitted the tag after the highest one already
    taken is used, so variants declared in order get `0, 1, 2, ...`. Tags are part of the type, two variants of the
    same enum can't share a tag and variants can't be subclassed.
    """

    # only on enums
    _variants: ClassVar[dict[int, type[SumType]]]
    # only on variants
    _tag: ClassVar[int]

    def __init_subclass__(cls, /, *, tag: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if SumType in cls.__bases__:
            if tag is not None:
                raise TypeError(f'{cls.__name__} is an enum, only its variants have tags')
            cls._variants = {}
            return

        enum = cls.sum_type()
        if enum not in cls.__bases__:
            raise TypeError(f'{cls.__name__}: variants of {enum.__name__} cannot be subclassed')

        # dataclass(slots=True) re-creates the class, the tag is carried in the class dict
        if tag is None:
            tag = cls.__dict__.get('_tag')
        if tag is None:
            tag = max(enum._variants, default=-1) + 1
        if not isinstance(tag, int) or not 0 <= tag <= MAX_U32:
            raise TypeError(f'{cls.__name__}: variant tag must be an int in [0, {MAX_U32}]')

        existing = enum._variants.get(tag)
        if existing is not None and existing.__qualname__ != cls.__qualname__:
            raise TypeError(f'{cls.__name__}: tag {tag} is already used by {existing.__name__}')
        cls._tag = tag
        enum._variants[tag] = cls

    @classmethod
    def sum_type(cls) -> type[SumType]:
        """The enum this class belongs to, an enum is its own sum type."""
        for base in cls.__mro__:
            if SumType in base.__bases__:
                return base
        raise TypeError('SumType itself is not an enum')

    @classmethod
    def variants(cls) -> MappingProxyType[int, type[SumType]]:
        """Variants of the enum, ordered by tag."""
        enum = cls.sum_type()
        return MappingProxyType(dict(sorted(enum._variants.items())))

    @classmethod
    def variant_tag(cls) -> int:
        if SumType in cls.__bases__:
            raise TypeError(f'{cls.__name__} is an enum, not a variant')
        return cls._tag
