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
Products (structs, tuple structs, tuples and units) have no framing: the fields are encoded one after the other in
declaration order, so a product with zero fields takes zero bytes.

>>> from functools import partial
>>> from canonser.serialization.encoding.bool import encode_bool, decode_bool
>>> from canonser.serialization.encoding.int import encode_int, decode_int
>>> from canonser.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> encoders = (partial(encode_int, length=4, signed=True), encode_utf8, encode_bool)
>>> se = Serializer.build_bytes_serializer()
>>> encode_tuple(se, (-2, 'ok', True), encoders)
>>> encode_tuple(se, (), ())
>>> bytes(se.finalize()).hex()
'feffffff026f6b01'

>>> decoders = (partial(decode_int, length=4, signed=True), decode_utf8, decode_bool)
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('feffffff026f6b01'))
>>> decode_tuple(de, decoders)
(-2, 'ok', True)
>>> decode_tuple(de, ())
()
>>> de.finalize()
"""

from typing import Any

from canonser.serialization import Deserializer, Serializer

from . import Decoder, Encoder


def encode_tuple(serializer: Serializer, values: tuple[Any, ...], encoders: tuple[Encoder[Any], ...]) -> None:
    if len(values) != len(encoders):
        raise TypeError(f'expected {len(encoders)} fields, got {len(values)}')
    for field, encoder in zip(values, encoders):
        encoder(serializer, field)


def decode_tuple(deserializer: Deserializer, decoders: tuple[Decoder[Any], ...]) -> tuple[Any, ...]:
    fields = []
    for decoder in decoders:
        fields.append(decoder(deserializer))
    return tuple(fields)
