from functools import partial

import pytest

from canonser.serialization import (
    Deserializer,
    DuplicateKeyError,
    InvalidOptionTagError,
    LengthOverflowError,
    MapNotCanonicallyOrderedError,
    RecursionLimitExceededError,
    Serializer,
    UnexpectedEndOfInputError,
    UnknownVariantTagError,
)
from canonser.serialization.compound_encoding import next_container_depth
from canonser.serialization.compound_encoding.collection import decode_collection, encode_collection
from canonser.serialization.compound_encoding.mapping import decode_mapping, decode_set, encode_mapping, encode_set
from canonser.serialization.compound_encoding.optional import decode_optional, encode_optional
from canonser.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from canonser.serialization.compound_encoding.variant import decode_variant, encode_variant
from canonser.serialization.encoding.bool import decode_bool, encode_bool
from canonser.serialization.encoding.float import decode_float
from canonser.serialization.encoding.int import decode_int, encode_int
from canonser.serialization.encoding.utf8 import decode_utf8, encode_utf8

encode_u64 = partial(encode_int, length=8, signed=False)
decode_u64 = partial(decode_int, length=8, signed=False)
encode_u8 = partial(encode_int, length=1, signed=False)
decode_u8 = partial(decode_int, length=1, signed=False)
decode_f64 = partial(decode_float, length=8)


def _encode_set_u64(values) -> bytes:
    se = Serializer.build_bytes_serializer()
    encode_set(se, values, encode_u64)
    return bytes(se.finalize())


def test_set_order_is_the_order_of_encoded_bytes() -> None:
    data = _encode_set_u64({500, 3})
    three = (3).to_bytes(8, 'little')
    five_hundred = (500).to_bytes(8, 'little')
    # compare the encodings, not the numbers
    assert three < five_hundred
    assert data == b'\x02' + three + five_hundred

    # little-endian makes 256 sort before 3, even though 3 < 256
    data = _encode_set_u64({3, 256})
    assert data == b'\x02' + (256).to_bytes(8, 'little') + (3).to_bytes(8, 'little')


def test_set_encoding_ignores_iteration_order() -> None:
    values = [9, 1, 70000, 2**63, 0, 255]
    assert _encode_set_u64(values) == _encode_set_u64(list(reversed(values))) == _encode_set_u64(sorted(values))


def test_set_decoding_rejects_unsorted_and_duplicates() -> None:
    three = (3).to_bytes(8, 'little')
    five_hundred = (500).to_bytes(8, 'little')

    de = Deserializer.build_bytes_deserializer(b'\x02' + five_hundred + three)
    with pytest.raises(MapNotCanonicallyOrderedError):
        decode_set(de, decode_u64, frozenset)

    de = Deserializer.build_bytes_deserializer(b'\x02' + three + three)
    with pytest.raises(DuplicateKeyError):
        decode_set(de, decode_u64, frozenset)


def test_set_encoding_rejects_colliding_members() -> None:
    # two distinct members with the same encoding can't be both in the output
    se = Serializer.build_bytes_serializer()
    with pytest.raises(DuplicateKeyError):
        encode_set(se, [1, 1], encode_u64)


def test_set_decoding_rejects_members_equal_after_decoding() -> None:
    # 0.0 and -0.0 have different bytes, so they are in canonical order, but they are the same set member
    positive_zero = bytes(8)
    negative_zero = bytes(7) + b'\x80'

    de = Deserializer.build_bytes_deserializer(b'\x02' + positive_zero + negative_zero)
    with pytest.raises(DuplicateKeyError):
        decode_set(de, decode_f64, set)

    de = Deserializer.build_bytes_deserializer(b'\x02' + positive_zero + b'\x01' + negative_zero + b'\x02')
    with pytest.raises(DuplicateKeyError):
        decode_mapping(de, decode_f64, decode_u8, dict)

    # a single signed zero is fine
    de = Deserializer.build_bytes_deserializer(b'\x01' + negative_zero + b'\x07')
    assert decode_mapping(de, decode_f64, decode_u8, dict) == {-0.0: 7}
    de.finalize()


def test_map_round_trip() -> None:
    values = {'zebra': 1, 'a': 2, 'apple': 3, '': 4}
    se = Serializer.build_bytes_serializer()
    encode_mapping(se, values, encode_utf8, encode_u8)
    data = bytes(se.finalize())
    # shorter keys first, since the length prefix is the first byte of each key
    assert data == bytes.fromhex('04' '00' '04' '0161' '02' '056170706c65' '03' '057a65627261' '01')

    de = Deserializer.build_bytes_deserializer(data)
    decoded = decode_mapping(de, decode_utf8, decode_u8, dict)
    de.finalize()
    assert decoded == values
    assert list(decoded) == ['', 'a', 'apple', 'zebra']


def test_map_decoding_checks_only_keys() -> None:
    # values are not part of the order, equal values are fine
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('02' '0161' '07' '0162' '07'))
    assert decode_mapping(de, decode_utf8, decode_u8, dict) == {'a': 7, 'b': 7}

    de = Deserializer.build_bytes_deserializer(bytes.fromhex('02' '0161' '07' '0161' '08'))
    with pytest.raises(DuplicateKeyError):
        decode_mapping(de, decode_utf8, decode_u8, dict)


def test_empty_map_and_set() -> None:
    se = Serializer.build_bytes_serializer()
    encode_mapping(se, {}, encode_utf8, encode_u8)
    encode_set(se, set(), encode_u64)
    data = bytes(se.finalize())
    assert data == b'\x00\x00'
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_mapping(de, decode_utf8, decode_u8, dict) == {}
    assert decode_set(de, decode_u64, set) == set()
    de.finalize()


def test_collection_truncated() -> None:
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('03' '01' '02'))
    with pytest.raises(UnexpectedEndOfInputError):
        decode_collection(de, decode_u8, list)


def test_collection_keeps_order() -> None:
    se = Serializer.build_bytes_serializer()
    encode_collection(se, [3, 1, 2], encode_u8)
    data = bytes(se.finalize())
    assert data == bytes.fromhex('03030102')
    assert decode_collection(Deserializer.build_bytes_deserializer(data), decode_u8, list) == [3, 1, 2]


def test_collection_of_zero_width_items_is_bounded_by_max_sequence_length() -> None:
    def decode_unit(deserializer: Deserializer) -> None:
        return None

    # 5 bytes of input ask for 2**31 - 1 items that take no bytes each
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff07'), max_sequence_length=1000)
    with pytest.raises(LengthOverflowError):
        decode_collection(de, decode_unit, list)

    de = Deserializer.build_bytes_deserializer(bytes.fromhex('e807'), max_sequence_length=1000)
    assert decode_collection(de, decode_unit, list) == [None] * 1000
    de.finalize()


def test_optional() -> None:
    se = Serializer.build_bytes_serializer()
    encode_optional(se, None, encode_bool)
    encode_optional(se, False, encode_bool)
    data = bytes(se.finalize())
    assert data == bytes.fromhex('000100')

    de = Deserializer.build_bytes_deserializer(data)
    assert decode_optional(de, decode_bool) is None
    assert decode_optional(de, decode_bool) is False
    de.finalize()


def test_optional_rejects_bad_tag_and_missing_value() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x02\x00')
    with pytest.raises(InvalidOptionTagError):
        decode_optional(de, decode_bool)

    de = Deserializer.build_bytes_deserializer(b'\x01')
    with pytest.raises(UnexpectedEndOfInputError):
        decode_optional(de, decode_bool)


def test_tuple_is_plain_concatenation() -> None:
    se = Serializer.build_bytes_serializer()
    encode_tuple(se, (True, 'x', 7), (encode_bool, encode_utf8, encode_u8))
    data = bytes(se.finalize())
    assert data == bytes.fromhex('01' '0178' '07')
    assert decode_tuple(Deserializer.build_bytes_deserializer(data), (decode_bool, decode_utf8, decode_u8)) == (
        True, 'x', 7,
    )


def test_variant() -> None:
    se = Serializer.build_bytes_serializer()
    encode_variant(se, 200, 'hi', encode_utf8)
    data = bytes(se.finalize())
    assert data == bytes.fromhex('c801' '026869')

    decoders = {0: decode_bool, 200: decode_utf8}
    assert decode_variant(Deserializer.build_bytes_deserializer(data), decoders) == 'hi'

    with pytest.raises(UnknownVariantTagError):
        decode_variant(Deserializer.build_bytes_deserializer(b'\x01\x00'), decoders)


def test_next_container_depth() -> None:
    assert next_container_depth(0, 1) == 1
    assert next_container_depth(99, 100) == 100
    with pytest.raises(RecursionLimitExceededError):
        next_container_depth(100, 100)
    with pytest.raises(RecursionLimitExceededError):
        next_container_depth(1, 1)
