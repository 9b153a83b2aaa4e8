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
This module implements encoding of IEEE-754 floating point numbers, 4 bytes (binary32) or 8 bytes (binary64).

The raw bit pattern is written little-endian, there is no canonicalization of NaN or of signed zeros: two floats are
the same value only if their bit patterns are the same.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.0, length=4)  # writes 0000803f
>>> encode_float(se, -2.5, length=8)  # writes 00000000000004c0
>>> bytes(se.finalize()).hex()
'0000803f00000000000004c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000803f00000000000004c0'))
>>> decode_float(de, length=4)
1.0
>>> decode_float(de, length=8)
-2.5
>>> de.finalize()

NaN payloads survive a decode/encode cycle:

>>> nan_bits = bytes.fromhex('010000000000f87f')
>>> de = Deserializer.build_bytes_deserializer(nan_bits)
>>> value = decode_float(de, length=8)
>>> value != value
True
>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, value, length=8)
>>> bytes(se.finalize()) == nan_bits
True

That includes the signaling bit of a binary32 NaN, which a round trip through a C float would set:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100807f'))
>>> value = decode_float(de, length=4)
>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, value, length=4)
>>> bytes(se.finalize()).hex()
'0100807f'

A binary32 can only hold values that are exactly representable:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_float(se, 0.1, length=4)
... except ValueError as e:
...     print(*e.args)
0.1 is not exactly representable as a 4-byte float
"""

import math
import struct

from canonser.serialization import Deserializer, Serializer

_FORMATS = {
    4: '<f',
    8: '<d',
}

_F32_EXPONENT_BITS = 0xff << 23
_F32_MANTISSA_BITS = (1 << 23) - 1
_F64_EXPONENT_BITS = 0x7ff << 52
_F64_MANTISSA_BITS = (1 << 52) - 1
# number of mantissa bits a binary64 has beyond a binary32
_MANTISSA_SHIFT = 52 - 23


def _get_format(length: int) -> str:
    try:
        return _FORMATS[length]
    except KeyError:
        raise ValueError(f'unsupported float length: {length}')


def _pack_float(value: float, *, length: int) -> bytes:
    format = _get_format(length)
    if length == 4 and math.isnan(value):
        return struct.pack('<I', _f32_nan_to_bits(value))
    try:
        data = struct.pack(format, value)
    except (OverflowError, struct.error):
        raise ValueError(f'{value!r} does not fit in a {length}-byte float')
    if not math.isnan(value) and struct.unpack(format, data)[0] != value:
        raise ValueError(f'{value!r} is not exactly representable as a {length}-byte float')
    return data


def _f32_nan_from_bits(bits: int) -> float:
    """ Widen a binary32 NaN to a float with the same sign and payload, the signaling bit included.

    `struct` goes through a C float, which quiets signaling NaNs, so the binary64 bits are built by hand.
    """
    sign = bits >> 31
    mantissa = (bits & _F32_MANTISSA_BITS) << _MANTISSA_SHIFT
    value, = struct.unpack('<d', struct.pack('<Q', (sign << 63) | _F64_EXPONENT_BITS | mantissa))
    return value


def _f32_nan_to_bits(value: float) -> int:
    """ The binary32 bits of a NaN, a ValueError is raised if its payload needs more than 23 bits."""
    bits, = struct.unpack('<Q', struct.pack('<d', value))
    mantissa = bits & _F64_MANTISSA_BITS
    if mantissa & ((1 << _MANTISSA_SHIFT) - 1):
        raise ValueError(f'NaN payload {mantissa:#x} is not exactly representable as a 4-byte float')
    return ((bits >> 63) << 31) | _F32_EXPONENT_BITS | (mantissa >> _MANTISSA_SHIFT)


def check_float(value: float, *, length: int) -> None:
    """ Raises a ValueError if the value can't be encoded with the given byte-length.

    >>> check_float(0.5, length=4)
    >>> try:
    ...     check_float(1e300, length=4)
    ... except ValueError as e:
    ...     print(*e.args)
    1e+300 does not fit in a 4-byte float
    """
    _pack_float(value, length=length)


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    """ Encode a float with the given byte-length.

    This modules's docstring has more details and examples.
    """
    serializer.write_bytes(_pack_float(value, length=length))


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    """ Decode a float with the given byte-length.

    This modules's docstring has more details and examples.
    """
    if length != 4:
        value, = deserializer.read_struct(_get_format(length))
        return value
    bits, = deserializer.read_struct('<I')
    if bits & _F32_EXPONENT_BITS == _F32_EXPONENT_BITS and bits & _F32_MANTISSA_BITS:
        return _f32_nan_from_bits(bits)
    value, = struct.unpack('<f', struct.pack('<I', bits))
    return value
