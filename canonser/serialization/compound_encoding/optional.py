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
An optional value starts with a presence byte, `0x00` means there is no value and nothing follows, `0x01` means the
value follows. Any other presence byte is rejected.

>>> from canonser.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, None, encode_bool)
>>> encode_optional(se, False, encode_bool)
>>> bytes(se.finalize()).hex()
'000100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('000100'))
>>> decode_optional(de, decode_bool) is None
True
>>> decode_optional(de, decode_bool)
False
>>> de.finalize()

>>> from canonser.serialization.exceptions import InvalidOptionTagError
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0201'))
>>> try:
...     decode_optional(de, decode_bool)
... except InvalidOptionTagError as e:
...     print(*e.args)
invalid option tag: 2
"""

from typing import Optional, TypeVar

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.exceptions import InvalidOptionTagError

from . import Decoder, Encoder

T = TypeVar('T')

_ABSENT = 0x00
_PRESENT = 0x01


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    serializer.write_byte(_ABSENT if value is None else _PRESENT)
    if value is not None:
        encoder(serializer, value)


def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]:
    presence = deserializer.read_byte()
    if presence == _ABSENT:
        return None
    if presence != _PRESENT:
        raise InvalidOptionTagError(f'invalid option tag: {presence}')
    return decoder(deserializer)
