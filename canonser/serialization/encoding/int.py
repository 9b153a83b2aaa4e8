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
Fixed-size integers: exactly `length` bytes, little-endian, two's complement when signed.

All byte patterns of the right length are valid, decoding can only fail by running out of input.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 7, length=1, signed=False)  # 07
>>> encode_int(se, -1, length=2, signed=True)  # ffff
>>> encode_int(se, 0x01020304, length=4, signed=False)  # 04030201
>>> encode_int(se, -(2**63), length=8, signed=True)  # 0000000000000080
>>> bytes(se.finalize()).hex()
'07ffff040302010000000000000080'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('07ffff040302010000000000000080'))
>>> [decode_int(de, length=1, signed=False), decode_int(de, length=2, signed=True)]
[7, -1]
>>> hex(decode_int(de, length=4, signed=False))
'0x1020304'
>>> decode_int(de, length=8, signed=True) == -(2**63)
True
>>> de.finalize()

Values that don't fit are a `ValueError`:

>>> try:
...     encode_int(Serializer.build_bytes_serializer(), -1, length=1, signed=False)
... except ValueError as e:
...     print(*e.args)
-1 does not fit in 1 unsigned byte(s)
"""

from canonser.serialization import Deserializer, Serializer


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    try:
        data = number.to_bytes(length, 'little', signed=signed)
    except OverflowError:
        kind = 'signed' if signed else 'unsigned'
        raise ValueError(f'{number} does not fit in {length} {kind} byte(s)')
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    return int.from_bytes(deserializer.read_bytes(length), 'little', signed=signed)
