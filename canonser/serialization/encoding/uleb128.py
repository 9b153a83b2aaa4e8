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
This module implements canonical ULEB128 for unsigned integers, it's used for collection lengths and variant tags.

LEB128 or Little Endian Base 128 is a variable-length code compression used to store arbitrarily large
integers in a small number of bytes. LEB128 is used in the DWARF debug file format and the WebAssembly
binary encoding for all integer literals.

References:
- https://en.wikipedia.org/wiki/LEB128
- https://dwarfstd.org/doc/DWARF5.pdf
- https://webassembly.github.io/spec/core/binary/values.html#integers

Each byte carries 7 bits of data, least significant group first, and the high bit is set on every byte except the
last one. On top of plain ULEB128, decoding enforces:

- minimality: the last byte cannot be `0x00` unless it is the only byte, otherwise the same value would have more
  than one encoding;
- a u32 bound: at most 5 bytes and a value of at most `2**32 - 1`.

>>> se = Serializer.build_bytes_serializer()
>>> se.write_bytes(b'test')  # writes 74657374
>>> encode_uleb128(se, 0)  # writes 00
>>> encode_uleb128(se, 127)  # writes 7f
>>> encode_uleb128(se, 128)  # writes 8001
>>> encode_uleb128(se, 624485)  # writes e58e26
>>> encode_uleb128(se, 2**32 - 1)  # writes ffffffff0f
>>> bytes(se.finalize()).hex()
'74657374007f8001e58e26ffffffff0f'

>>> data = bytes.fromhex('00 7f 8001 e58e26 ffffffff0f 74657374')
>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_uleb128(de)  # reads 00
0
>>> decode_uleb128(de)  # reads 7f
127
>>> decode_uleb128(de)  # reads 8001
128
>>> decode_uleb128(de)  # reads e58e26
624485
>>> decode_uleb128(de)  # reads ffffffff0f
4294967295
>>> bytes(de.read_all())  # reads 74657374
b'test'
>>> de.finalize()

A value that has a shorter encoding is rejected:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('8100'))
>>> try:
...     decode_uleb128(de)
... except NonCanonicalLengthError as e:
...     print(*e.args)
non-canonical ULEB128 encoding: 2 bytes used for value 1

Values beyond u32 are rejected, whether because of the value or because of the number of bytes:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff1f'))
>>> try:
...     decode_uleb128(de)
... except LengthOverflowError as e:
...     print(*e.args)
ULEB128 value 8589934591 is above the maximum of 4294967295

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('808080808001'))
>>> try:
...     decode_uleb128(de)
... except LengthOverflowError as e:
...     print(*e.args)
ULEB128 value does not fit in 5 bytes
"""

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.consts import MAX_U32, ULEB128_MAX_BYTES
from canonser.serialization.exceptions import LengthOverflowError, NonCanonicalLengthError


def encode_uleb128(serializer: Serializer, value: int, *, max_value: int = MAX_U32) -> None:
    """ Encodes an unsigned integer using ULEB128.

    This module's docstring has more details on ULEB128 and examples.
    """
    if value < 0:
        raise ValueError('cannot encode value <0 as unsigned')
    if value > max_value:
        raise LengthOverflowError(f'ULEB128 value {value} is above the maximum of {max_value}')
    while True:
        byte = value & 0b0111_1111
        value >>= 7
        if value == 0:
            serializer.write_byte(byte)
            break
        serializer.write_byte(byte | 0b1000_0000)


def decode_uleb128(deserializer: Deserializer, *, max_value: int = MAX_U32) -> int:
    """ Decodes a ULEB128-encoded unsigned integer, only the canonical encoding is accepted.

    This module's docstring has more details on ULEB128 and examples.
    """
    result = 0
    for i in range(ULEB128_MAX_BYTES):
        byte = deserializer.read_byte()
        digit = byte & 0b0111_1111
        result |= digit << (7 * i)
        if (byte & 0b1000_0000) == 0:
            if i > 0 and digit == 0:
                raise NonCanonicalLengthError(f'non-canonical ULEB128 encoding: {i + 1} bytes used for value {result}')
            if result > max_value:
                raise LengthOverflowError(f'ULEB128 value {result} is above the maximum of {max_value}')
            return result
    raise LengthOverflowError(f'ULEB128 value does not fit in {ULEB128_MAX_BYTES} bytes')


def encode_length(serializer: Serializer, length: int) -> None:
    """ Encodes the length prefix of a collection, a string or a byte blob.
    """
    if length > serializer.max_sequence_length:
        raise LengthOverflowError(f'length {length} is above the maximum of {serializer.max_sequence_length}')
    encode_uleb128(serializer, length)


def decode_length(deserializer: Deserializer) -> int:
    """ Decodes the length prefix of a collection, a string or a byte blob.
    """
    length = decode_uleb128(deserializer)
    if length > deserializer.max_sequence_length:
        raise LengthOverflowError(f'length {length} is above the maximum of {deserializer.max_sequence_length}')
    return length


def encode_variant_index(serializer: Serializer, tag: int) -> None:
    """ Encodes the tag of the active variant of an enum.
    """
    encode_uleb128(serializer, tag)


def decode_variant_index(deserializer: Deserializer) -> int:
    """ Decodes the tag of the active variant of an enum, it's not checked against any variant set.
    """
    return decode_uleb128(deserializer)
