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
Encoders that are generic over the encoding of their contents: sequences, options, products, sums, maps and sets.

They receive the encoders (or decoders) of what they contain as arguments, for example:

    def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None: ...
    def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]: ...

They know nothing about Python types or shapes, `canonser.shapes` builds the encoders and passes them in.

Nesting is not tracked here. Shapes that can recurse (structs, tuple structs and enums) carry an explicit depth and call
`next_container_depth` once per level.
"""

from typing import Protocol, TypeVar

from canonser.serialization.deserializer import Deserializer
from canonser.serialization.exceptions import RecursionLimitExceededError
from canonser.serialization.serializer import Serializer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...


def next_container_depth(depth: int, max_depth: int) -> int:
    """ Depth of a container nested inside a container at `depth`.

    >>> next_container_depth(0, 2)
    1
    >>> next_container_depth(1, 2)
    2
    >>> try:
    ...     next_container_depth(2, 2)
    ... except RecursionLimitExceededError as e:
    ...     print(*e.args)
    recursion limit exceeded: container depth above 2
    """
    depth += 1
    if depth > max_depth:
        raise RecursionLimitExceededError(f'recursion limit exceeded: container depth above {max_depth}')
    return depth
