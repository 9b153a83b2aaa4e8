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

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias, get_args, get_origin

from structlog import get_logger

from canonser.types import SumType
from canonser.utils.typing import is_subclass, is_union

if TYPE_CHECKING:
    from canonser.shapes.shape import Shape


logger = get_logger()

TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToShapeMap: TypeAlias = Mapping[Any, type['Shape']]


def unpack_type_args(type_: Any, origin: type, expected: str, *, count: int = 1) -> tuple[Any, ...]:
    """ The arguments of a generic alias like `list[int]`, which must be exactly `count` and its origin `origin`.

    >>> unpack_type_args(dict[str, bytes], dict, 'dict[K, V]', count=2)
    (<class 'str'>, <class 'bytes'>)
    >>> unpack_type_args(list, list, 'list[T]')
    Traceback (most recent call last):
    ...
    TypeError: expected list[T], got list
    """
    actual_origin = get_origin(type_) or type_
    if not isinstance(actual_origin, type) or not issubclass(actual_origin, origin):
        raise TypeError(f'expected {expected}, got {pretty_type(type_)}')
    args = get_args(type_)
    if len(args) != count:
        raise TypeError(f'expected {expected}, got {pretty_type(type_)}')
    return args


def is_origin_hashable(type_: Any) -> bool:
    """ Whether values of the given annotation are `Hashable`, looking only at the outermost type of each union member.

    >>> from canonser.types import uint8
    >>> [is_origin_hashable(t) for t in (uint8, str | None, frozenset[str], tuple[str, bytes])]
    [True, True, True, True]
    >>> [is_origin_hashable(t) for t in (set[str], dict[str, str], list[str], bytes | list[str])]
    [False, False, False, False]

    The arguments aren't looked at, `tuple[list[str]]` passes here and is caught when its shape is built.
    """
    members = get_args(type_) if is_union(type_) else (type_,)
    for member in members:
        origin = get_origin(member) or member
        if origin is None or origin is NoneType:
            continue
        if not is_subclass(origin, Hashable):
            return False
    return True


def check_hashable(type_: Any) -> None:
    """ Raise a TypeError when a key or member type is not hashable."""
    if not is_origin_hashable(type_):
        raise TypeError(f'{pretty_type(type_)} is not hashable, it cannot be a key or a set member')


def pretty_type(type_: Any) -> str:
    """ How a type is shown in errors and logs.

    >>> pretty_type(None), pretty_type(bytes), pretty_type(dict[str, bytes])
    ('None', 'bytes', 'dict[str, bytes]')
    """
    if type_ is None or type_ is NoneType:
        return 'None'
    if get_args(type_):
        return str(type_)
    return getattr(type_, '__name__', repr(type_))


def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Replace every type in an annotation that has an alias, arguments included.

    With the default alias map `float` becomes `float64` and `bytearray` becomes `bytes`:

    >>> from canonser.shapes import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(tuple[str, dict[bytearray, list[float]]], alias_map, _verbose=False)
    tuple[str, dict[bytes, list[canonser.types.float64]]]
    """
    aliased = _replace_aliases(type_, alias_map)
    if _verbose and aliased is not type_:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(aliased))
    return aliased


def _replace_aliases(type_: Any, alias_map: TypeAliasMap) -> Any:
    """ Returns `type_` itself (the same object) when nothing had to be replaced."""
    args = get_args(type_)

    if is_union(type_):
        new_args = tuple(_replace_aliases(arg, alias_map) for arg in args)
        if all(new is old for new, old in zip(new_args, args)):
            return type_
        return reduce(or_, new_args)

    origin = get_origin(type_) or type_
    new_origin = alias_map.get(origin, origin)
    if not args:
        return new_origin if new_origin is not origin else type_

    new_args = tuple(_replace_aliases(arg, alias_map) for arg in args)
    if new_origin is origin and all(new is old for new, old in zip(new_args, args)):
        return type_
    return new_origin[new_args]


def get_usable_origin_type(type_: Any, /, *, type_map: 'Shape.TypeMap', _verbose: bool = True) -> Any:
    """ The key of `type_map.shapes_map` whose Shape class builds the given type, after aliasing.

    Each dataclass, NamedTuple and enum (`SumType`) is a type of its own, they map to the keys `dataclass`,
    `NamedTuple` and `SumType`. Unions map to `UnionType`, only `T | None` is accepted.

    >>> from canonser.shapes import default_type_map
    >>> type_map = default_type_map()
    >>> get_usable_origin_type(dict[str, float], type_map=type_map, _verbose=False)
    <class 'dict'>
    >>> get_usable_origin_type(str | None, type_map=type_map, _verbose=False) is UnionType
    True
    >>> get_usable_origin_type(int, type_map=type_map, _verbose=False)
    Traceback (most recent call last):
    ...
    TypeError: type int is not supported by any Shape class
    """
    if isinstance(type_, str):
        raise TypeError('string annotations are not supported, they must be resolved first')

    aliased = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    shapes_map = type_map.shapes_map

    if is_union(aliased):
        if NoneType not in get_args(aliased):
            raise TypeError(f'type {pretty_type(type_)} is not supported, only `T | None` unions are')
        if UnionType in shapes_map:
            return UnionType

    origin = get_origin(aliased) or aliased
    if origin in shapes_map:
        return origin

    if isinstance(origin, type):
        if SumType in shapes_map and issubclass(origin, SumType):
            return SumType
        if NamedTuple in shapes_map and NamedTuple in getattr(origin, '__orig_bases__', ()):
            return NamedTuple
        if dataclass in shapes_map and is_dataclass(origin):
            return dataclass

    raise TypeError(f'type {pretty_type(type_)} is not supported by any Shape class')
