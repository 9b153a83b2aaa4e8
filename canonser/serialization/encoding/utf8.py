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
Strings are the UTF-8 bytes of the text with the same length prefix as byte blobs, the length counts bytes, not
characters.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'naïve')  # 06 6e61c3af7665
>>> encode_utf8(se, '')  # 00
>>> encode_utf8(se, '€')  # 03 e282ac
>>> bytes(se.finalize()).hex()
'066e61c3af76650003e282ac'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('066e61c3af76650003e282ac'))
>>> [decode_utf8(de) for _ in range(3)]
['naïve', '', '€']
>>> de.finalize()

Decoding is strict: truncated sequences, surrogates and overlong forms are all rejected.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('02e282'))
>>> try:
...     decode_utf8(de)
... except InvalidUtf8Error as e:
...     print(*e.args)
invalid string encoding: byte 0xe2 at position 0
"""

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.exceptions import InvalidUtf8Error

from .bytes import decode_bytes, encode_bytes


def encode_utf8(serializer: Serializer, value: str) -> None:
    assert isinstance(value, str)
    encode_bytes(serializer, value.encode('utf-8'))


def decode_utf8(deserializer: Deserializer) -> str:
    data = decode_bytes(deserializer)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(f'invalid string encoding: byte {data[e.start]:#x} at position {e.start}') from e
