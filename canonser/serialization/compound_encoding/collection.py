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

r"""
Sequences keep their order: the number of items (canonical ULEB128) followed by each item encoded in turn.

Layout: [N: uleb128][item_0]...[item_N-1]

>>> from functools import partial
>>> from canonser.serialization.encoding.int import decode_int, encode_int
>>> encode_u16 = partial(encode_int, length=2, signed=False)
>>> decode_u16 = partial(decode_int, length=2, signed=False)
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, [1, 258, 0xffff], encode_u16)
>>> bytes(se.finalize()).hex()
'0301000201ffff'

The `builder` decides the concrete container, anything that accepts an iterable works:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0301000201ffff'))
>>> decode_collection(de, decode_u16, tuple)
(1, 258, 65535)
>>> de.finalize()

Nested sequences are just sequences whose items are sequences, each inner one has its own length:

>>> from canonser.serialization.encoding.utf8 import encode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, [['a'], [], ['b', 'c']], partial(encode_collection, encoder=encode_utf8))
>>> bytes(se.finalize()).hex()
'03010161000201620163'
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.uleb128 import decode_length, encode_length

from . import Decoder, Encoder

T = TypeVar('T')
C = TypeVar('C', bound=Collection)


def encode_collection(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_length(serializer, len(values))
    for item in values:
        encoder(serializer, item)


def decode_collection(deserializer: Deserializer, decoder: Decoder[T], builder: Callable[[Iterable[T]], C]) -> C:
    """ Decode a length and that many items, handing them to `builder`.

    Items that take zero bytes (`None`, `tuple[()]`, a dataclass with no fields) consume no input, so a 5-byte length
    alone can ask for `max_sequence_length` items. The deserializer's `max_sequence_length` is the only bound on that,
    lower it when decoding untrusted input of such types:

    >>> from canonser.serialization.exceptions import LengthOverflowError
    >>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff07'), max_sequence_length=1000)
    >>> try:
    ...     decode_collection(de, lambda _: None, list)
    ... except LengthOverflowError as e:
    ...     print(*e.args)
    length 2147483647 is above the maximum of 1000
    """
    count = decode_length(deserializer)
    return builder(decoder(deserializer) for _ in range(count))
