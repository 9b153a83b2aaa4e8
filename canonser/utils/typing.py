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

from types import UnionType
from typing import Any, Union, get_origin


def is_union(type_: Any, /) -> bool:
    """ Whether an annotation is a union, written either as `Union[A, B]`/`Optional[A]` or as `A | B`.

    >>> from typing import Optional
    >>> from canonser.types import uint8
    >>> [is_union(t) for t in (uint8 | None, Optional[str], Union[str, bytes])]
    [True, True, True]
    >>> [is_union(t) for t in (uint8, list[str], None)]
    [False, False, False]
    """
    return type_ is Union or type_ is UnionType or get_origin(type_) in (Union, UnionType)


def unwrap_newtype(type_: Any, /) -> Any:
    """ Follow a chain of NewTypes down to the type they were created from, other types are returned as is.

    >>> from typing import NewType
    >>> from canonser.types import float32, uint64
    >>> unwrap_newtype(uint64), unwrap_newtype(float32), unwrap_newtype(str)
    (<class 'int'>, <class 'float'>, <class 'str'>)
    >>> Balance = NewType('Balance', uint64)
    >>> unwrap_newtype(Balance)
    <class 'int'>
    """
    while (supertype := getattr(type_, '__supertype__', None)) is not None:
        type_ = supertype
    return type_


def is_subclass(cls: Any, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Same as `issubclass`, but a NewType is treated as the type it wraps.

    >>> from canonser.types import char, uint8
    >>> is_subclass(uint8, int), is_subclass(char, str), is_subclass(uint8, str | bytes)
    (True, True, False)
    >>> is_subclass(bool, int)
    True
    """
    return issubclass(unwrap_newtype(cls), class_or_tuple)
