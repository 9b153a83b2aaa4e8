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
A sum value (an enum with exactly one active variant) is encoded as the variant tag followed by the variant's fields.

Layout: [tag: uleb128][variant fields]

The tag is fixed by the type, decoding an unknown tag is an error.

>>> from canonser.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from canonser.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_variant(se, 0, True, encode_bool)
>>> encode_variant(se, 200, 'foo', encode_utf8)
>>> bytes(se.finalize()).hex()
'0001c80103666f6f'

Breakdown of the result:

    00: tag 0
    01: True
    c801: tag 200
    03666f6f: 'foo'

>>> decoders = {0: decode_bool, 200: decode_utf8}
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0001c80103666f6f'))
>>> decode_variant(de, decoders)
True
>>> decode_variant(de, decoders)
'foo'
>>> de.finalize()

>>> from canonser.serialization.exceptions import UnknownVariantTagError
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0101'))
>>> try:
...     decode_variant(de, decoders)
... except UnknownVariantTagError as e:
...     print(*e.args)
unknown variant tag: 1
"""

from collections.abc import Mapping
from typing import TypeVar

from canonser.serialization import Deserializer, Serializer
from canonser.serialization.encoding.uleb128 import decode_variant_index, encode_variant_index
from canonser.serialization.exceptions import UnknownVariantTagError

from . import Decoder, Encoder

T = TypeVar('T')


def encode_variant(serializer: Serializer, tag: int, value: T, encoder: Encoder[T]) -> None:
    encode_variant_index(serializer, tag)
    encoder(serializer, value)


def decode_variant(deserializer: Deserializer, decoders: Mapping[int, Decoder[T]]) -> T:
    tag = decode_variant_index(deserializer)
    decoder = decoders.get(tag)
    if decoder is None:
        raise UnknownVariantTagError(f'unknown variant tag: {tag}')
    return decoder(deserializer)
