#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

r"""
A mapping is encoded as a length followed by its (key, value) pairs, sorted in strictly increasing lexicographic order
of the key's *encoded bytes*. Sets are encoded the same way, without the values. The order of the in-memory container
never matters, two maps with the same entries always have the same encoding.

Layout: [N: uleb128][key_0][value_0]...[key_N][value_N]

>>> from canonser.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from canonser.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> values = {'foo': False, 'bar': True, 'foobar': True, 'baz': False}
>>> encode_mapping(se, values, encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'0403626172010362617a0003666f6f0006666f6f62617201'

Breakdown of the result:

    04: 4 in uleb128, the number of entries
    03626172: 'bar'
    01: True
    0362617a: 'baz'
    00: False
    03666f6f: 'foo'
    00: False
    06666f6f626172: 'foobar'
    01: True

Notice that the length prefix is part of the key bytes, so shorter strings come first.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0403626172010362617a0003666f6f0006666f6f62617201'))
>>> decode_mapping(de, decode_utf8, decode_bool, dict)
{'bar': True, 'baz': False, 'foo': False, 'foobar': True}
>>> de.finalize()

Entries that aren't strictly increasing are rejected:

>>> from canonser.serialization.exceptions import DuplicateKeyError, MapNotCanonicallyOrderedError
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0203666f6f000362617201'))
>>> try:
...     decode_mapping(de, decode_utf8, decode_bool, dict)
... except MapNotCanonicallyOrderedError as e:
...     print(*e.args)
map not canonically ordered: key 03626172 after 03666f6f

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0203626172010362617200'))
>>> try:
...     decode_mapping(de, decode_utf8, decode_bool, dict)
... except DuplicateKeyError as e:
...     print(*e.args)
duplicate key: 03626172

The order is the order of the encoded bytes, not of the values. A `u64` set with 3 and 256 puts 256 first:

>>> from functools import partial
>>> from canonser.serialization.encoding.int import decode_int, encode_int
>>> encode_u64 = partial(encode_int, length=8, signed=False)
>>> decode_u64 = partial(decode_int, length=8, signed=False)
>>> se = Serializer.build_bytes_serializer()
>>> encode_set(se, {3, 256}, encode_u64)
>>> bytes(se.finalize()).hex()
'0200010000000000000300000000000000'
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200010000000000000300000000000000'))
>>> sorted(decode_set(de, decode_u64, frozenset))
[3, 256]
>>> de.finalize()
"""

from collections.abc import Collection, Iterable, Iterator, Mapping
from typing import Callable, Optional, TypeVar

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.uleb128 import decode_length, encode_length
from canonser.serialization.exceptions import DuplicateKeyError, MapNotCanonicallyOrderedError

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')
T = TypeVar('T')
M = TypeVar('M', bound=Mapping)
S = TypeVar('S', bound=Collection)


def _encode_to_bytes(serializer: Serializer, value: T, encoder: Encoder[T]) -> bytes:
    """ Encode a single value into a scratch serializer with the same limits as `serializer`."""
    scratch = Serializer.build_bytes_serializer(
        max_container_depth=serializer.max_container_depth,
        max_sequence_length=serializer.max_sequence_length,
    )
    encoder(scratch, value)
    return bytes(scratch.finalize())


def _sort_canonically(entries: list[tuple[bytes, bytes]]) -> list[tuple[bytes, bytes]]:
    entries.sort(key=lambda entry: entry[0])
    for (prev_key, _), (key, _) in zip(entries, entries[1:]):
        if prev_key == key:
            raise DuplicateKeyError(f'duplicate key: {key.hex()}')
    return entries


def _check_canonical_order(prev_key: Optional[bytes], key: bytes) -> None:
    if prev_key is None:
        return
    if key == prev_key:
        raise DuplicateKeyError(f'duplicate key: {key.hex()}')
    if key < prev_key:
        raise MapNotCanonicallyOrderedError(f'map not canonically ordered: key {key.hex()} after {prev_key.hex()}')


def _check_decoded_size(result: Collection, length: int) -> None:
    """ The built container must hold one entry per decoded key, keys with different encodings can still be equal,
    like `0.0` and `-0.0`.
    """
    if len(result) != length:
        raise DuplicateKeyError(f'duplicate key: {length - len(result)} of {length} keys are equal to another key')


def _iter_canonical_keys(deserializer: Deserializer, length: int, key_decoder: Decoder[KT]) -> Iterator[KT]:
    prev_key: Optional[bytes] = None
    for _ in range(length):
        tracker = deserializer.with_tracking()
        key = key_decoder(tracker)
        key_bytes = tracker.consumed()
        _check_canonical_order(prev_key, key_bytes)
        prev_key = key_bytes
        yield key


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    entries = _sort_canonically([
        (_encode_to_bytes(serializer, key, key_encoder), _encode_to_bytes(serializer, value, value_encoder))
        for key, value in values_mapping.items()
    ])
    encode_length(serializer, len(entries))
    for key_bytes, value_bytes in entries:
        serializer.write_bytes(key_bytes)
        serializer.write_bytes(value_bytes)


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], M],
) -> M:
    length = decode_length(deserializer)
    result = mapping_builder(
        (key, value_decoder(deserializer))
        for key in _iter_canonical_keys(deserializer, length, key_decoder)
    )
    _check_decoded_size(result, length)
    return result


def encode_set(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    entries = _sort_canonically([(_encode_to_bytes(serializer, value, encoder), b'') for value in values])
    encode_length(serializer, len(entries))
    for value_bytes, _ in entries:
        serializer.write_bytes(value_bytes)


def decode_set(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], S],
) -> S:
    length = decode_length(deserializer)
    result = builder(_iter_canonical_keys(deserializer, length, decoder))
    _check_decoded_size(result, length)
    return result
