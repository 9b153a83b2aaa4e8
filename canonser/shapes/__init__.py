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

from collections import OrderedDict
from dataclasses import dataclass
from functools import cache
from types import NoneType, UnionType
from typing import Any, NamedTuple, Union

from structlog import get_logger

from canonser.shapes.bool_shape import BoolShape
from canonser.shapes.bytes_shape import BytesShape
from canonser.shapes.char_shape import CharShape
from canonser.shapes.collection_shape import FrozenSetShape, ListShape, SetShape
from canonser.shapes.float_shape import F32Shape, F64Shape
from canonser.shapes.int_shape import (
    I8Shape,
    I16Shape,
    I32Shape,
    I64Shape,
    I128Shape,
    U8Shape,
    U16Shape,
    U32Shape,
    U64Shape,
    U128Shape,
)
from canonser.shapes.map_shape import DictShape
from canonser.shapes.namedtuple_shape import NamedTupleShape
from canonser.shapes.null_shape import NullShape
from canonser.shapes.optional_shape import OptionalShape
from canonser.shapes.shape import Shape
from canonser.shapes.str_shape import StrShape
from canonser.shapes.struct_shape import StructShape
from canonser.shapes.sum_shape import SumShape
from canonser.shapes.tuple_shape import TupleShape
from canonser.shapes.utils import TypeAliasMap, TypeToShapeMap, pretty_type
from canonser.types import (
    SumType,
    char,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    int128,
    uint8,
    uint16,
    uint32,
    uint64,
    uint128,
)

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'TYPE_TO_SHAPE_MAP',
    'BoolShape',
    'BytesShape',
    'CharShape',
    'DictShape',
    'F32Shape',
    'F64Shape',
    'FrozenSetShape',
    'I8Shape',
    'I16Shape',
    'I32Shape',
    'I64Shape',
    'I128Shape',
    'ListShape',
    'NamedTupleShape',
    'NullShape',
    'OptionalShape',
    'SetShape',
    'Shape',
    'StrShape',
    'StructShape',
    'SumShape',
    'TupleShape',
    'TypeAliasMap',
    'TypeToShapeMap',
    'U8Shape',
    'U16Shape',
    'U32Shape',
    'U64Shape',
    'U128Shape',
    'default_type_map',
    'make_shape',
]

logger = get_logger()

# Python only has one float, the codec needs to know the width
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    float: float64,
    bytearray: bytes,
    OrderedDict: dict,
}

# Mapping between types and Shape classes.
TYPE_TO_SHAPE_MAP: TypeToShapeMap = {
    # primitives:
    bool: BoolShape,
    uint8: U8Shape,
    uint16: U16Shape,
    uint32: U32Shape,
    uint64: U64Shape,
    uint128: U128Shape,
    int8: I8Shape,
    int16: I16Shape,
    int32: I32Shape,
    int64: I64Shape,
    int128: I128Shape,
    float32: F32Shape,
    float64: F64Shape,
    char: CharShape,
    # containers:
    str: StrShape,
    bytes: BytesShape,
    list: ListShape,
    tuple: TupleShape,
    set: SetShape,
    frozenset: FrozenSetShape,
    dict: DictShape,
    Union: OptionalShape,
    UnionType: OptionalShape,
    # unit:
    None: NullShape,
    NoneType: NullShape,
    # named types, each class is a type of its own:
    dataclass: StructShape,
    NamedTuple: NamedTupleShape,
    SumType: SumShape,
}


def default_type_map() -> Shape.TypeMap:
    """ A fresh type map with the default maps, named shapes are only shared within the same type map."""
    return Shape.TypeMap(DEFAULT_TYPE_ALIAS_MAP, TYPE_TO_SHAPE_MAP, {})


@cache
def make_shape(type_: Any, /) -> Shape:
    """ Like Shape.from_type, but with the default maps, the result is cached since shapes are immutable.

    If you need to customize the mapping use `Shape.from_type` instead.

    >>> from canonser.types import uint32
    >>> type(make_shape(dict[str, list[uint32]])).__name__
    'DictShape'
    >>> make_shape(uint32) is make_shape(uint32)
    True
    """
    logger.debug('building shape', type=pretty_type(type_))
    return Shape.from_type(type_, type_map=default_type_map())
