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
This module implements encoding of a single Unicode scalar value as its code point in 4 little-endian bytes.

Valid scalar values are `0x0000..0xD7FF` and `0xE000..0x10FFFF`, anything else (surrogates or values beyond the
Unicode range) is rejected.

>>> se = Serializer.build_bytes_serializer()
>>> encode_char(se, 'A')  # writes 41000000
>>> encode_char(se, '\x14')  # writes 14000000
>>> encode_char(se, '😎')  # writes 0ef60100
>>> bytes(se.finalize()).hex()
'41000000140000000ef60100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('41000000140000000ef60100'))
>>> decode_char(de)
'A'
>>> decode_char(de)
'\x14'
>>> decode_char(de)
'😎'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00d80000'))
>>> try:
...     decode_char(de)
... except InvalidCharError as e:
...     print(*e.args)
invalid char: 0xd800 is not a Unicode scalar value

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00001100'))
>>> try:
...     decode_char(de)
... except InvalidCharError as e:
...     print(*e.args)
invalid char: 0x110000 is not a Unicode scalar value
"""

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.exceptions import InvalidCharError

from .int import decode_int, encode_int

MAX_CODE_POINT = 0x10FFFF
SURROGATE_RANGE = range(0xD800, 0xE000)


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT and code_point not in SURROGATE_RANGE


def encode_char(serializer: Serializer, value: str) -> None:
    """ Encodes a single character as a 4-byte code point.
    """
    assert isinstance(value, str) and len(value) == 1
    code_point = ord(value)
    if not is_scalar_value(code_point):
        raise ValueError(f'{code_point:#x} is not a Unicode scalar value')
    encode_int(serializer, code_point, length=4, signed=False)


def decode_char(deserializer: Deserializer) -> str:
    """ Decodes a single character from a 4-byte code point.
    """
    code_point = decode_int(deserializer, length=4, signed=False)
    if not is_scalar_value(code_point):
        raise InvalidCharError(f'invalid char: {code_point:#x} is not a Unicode scalar value')
    return chr(code_point)
