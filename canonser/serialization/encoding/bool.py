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
Booleans take exactly one byte, `0x00` for `False` and `0x01` for `True`.

Every other byte value is rejected, otherwise a "truthy" byte like `0x02` would be a second encoding of `True`.

>>> se = Serializer.build_bytes_serializer()
>>> for value in (True, False, True):
...     encode_bool(se, value)
>>> bytes(se.finalize()).hex()
'010001'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100ff'))
>>> decode_bool(de), decode_bool(de)
(True, False)
>>> try:
...     decode_bool(de)
... except InvalidBooleanError as e:
...     print(*e.args)
non-canonical boolean: 0xff
"""

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.exceptions import InvalidBooleanError

_FALSE = 0x00
_TRUE = 0x01


def encode_bool(serializer: Serializer, value: bool) -> None:
    assert isinstance(value, bool)
    serializer.write_byte(_TRUE if value else _FALSE)


def decode_bool(deserializer: Deserializer) -> bool:
    byte = deserializer.read_byte()
    if byte not in (_FALSE, _TRUE):
        raise InvalidBooleanError(f'non-canonical boolean: {byte:#04x}')
    return byte == _TRUE
