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
Byte blobs are written as their length (a canonical ULEB128, see `uleb128.encode_length`) followed by the raw bytes.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'')
>>> encode_bytes(se, b'\xca\xfe')
>>> bytes(se.finalize()).hex()
'0002cafe'

Lengths of 128 or more take more than one byte:

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, bytes(300))
>>> encoded = bytes(se.finalize())
>>> encoded[:3].hex(), len(encoded)
('ac0200', 302)

The decoded value is always a new `bytes`, it does not share memory with the input:

>>> de = Deserializer.build_bytes_deserializer(encoded)
>>> blob = decode_bytes(de)
>>> type(blob).__name__, len(blob)
('bytes', 300)
>>> de.finalize()

>>> from canonser.serialization.exceptions import TrailingDataError, UnexpectedEndOfInputError
>>> de = Deserializer.build_bytes_deserializer(b'\x02abc')
>>> decode_bytes(de)
b'ab'
>>> try:
...     de.finalize()
... except TrailingDataError as e:
...     print(*e.args)
trailing data: 1 bytes left at position 3

>>> de = Deserializer.build_bytes_deserializer(b'\x04tes')
>>> try:
...     decode_bytes(de)
... except UnexpectedEndOfInputError as e:
...     print(*e.args)
not enough bytes to read at position 1
"""

from canonser.serialization import Deserializer, Serializer

from .uleb128 import decode_length, encode_length


def encode_bytes(serializer: Serializer, data: bytes) -> None:
    assert isinstance(data, bytes)
    encode_length(serializer, len(data))
    serializer.write_bytes(data)


def decode_bytes(deserializer: Deserializer) -> bytes:
    size = decode_length(deserializer)
    return bytes(deserializer.read_bytes(size))
