import pytest

from canonser.serialization import (
    Deserializer,
    LengthOverflowError,
    NonCanonicalLengthError,
    Serializer,
    UnexpectedEndOfInputError,
)
from canonser.serialization.encoding.uleb128 import (
    decode_length,
    decode_uleb128,
    decode_variant_index,
    encode_length,
    encode_uleb128,
    encode_variant_index,
)


def _do_round_trip_test_with_size(n: int, encoded_size: int) -> None:
    se = Serializer.build_bytes_serializer()
    encode_uleb128(se, n)
    encoded_n = bytes(se.finalize())
    assert len(encoded_n) == encoded_size
    de = Deserializer.build_bytes_deserializer(encoded_n)
    assert decode_uleb128(de) == n
    de.finalize()


EXAMPLES_BY_SIZE = {
    1: [0, 1, 2, 3, 4, 50, 63, 64, 126, 127],
    2: [128, 129, 1000, 3001, 8191, 8192, 16383],
    3: [16384, 100000, 1048575, 1048576, 2097151],
}


def gen_test_cases():
    test_cases = []
    # convert example to test cases
    for size, examples in EXAMPLES_BY_SIZE.items():
        for example in examples:
            test_cases.append((example, size))
    # generate additional test cases, a u32 never needs more than 5 bytes
    for size in range(4, 6):
        n_lo = 1 << (7 * (size - 1))
        n_hi = min((1 << (7 * size)) - 1, 2**32 - 1)
        test_cases.append((n_lo, size))
        test_cases.append((n_hi, size))
    return test_cases


@pytest.mark.parametrize('n, encoded_size', gen_test_cases())
def test_round_trip_with_size(n, encoded_size):
    _do_round_trip_test_with_size(n, encoded_size)


@pytest.mark.parametrize('data', ['8000', '808000', 'ff00', '80808000', '8080808000'])
def test_non_minimal_encoding_is_rejected(data):
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(data))
    with pytest.raises(NonCanonicalLengthError):
        decode_uleb128(de)


@pytest.mark.parametrize('data', ['8080808010', 'ffffffff7f', '808080808001', 'ffffffffffffffffff01'])
def test_overflow_is_rejected(data):
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(data))
    with pytest.raises(LengthOverflowError):
        decode_uleb128(de)


@pytest.mark.parametrize('data', ['', '80', 'ff', 'ffffffff'])
def test_missing_last_byte(data):
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(data))
    with pytest.raises(UnexpectedEndOfInputError):
        decode_uleb128(de)


def test_encode_out_of_range() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_uleb128(se, -1)
    with pytest.raises(LengthOverflowError):
        encode_uleb128(se, 2**32)
    assert se.cur_pos() == 0


def test_length_is_bounded_by_max_sequence_length() -> None:
    se = Serializer.build_bytes_serializer(max_sequence_length=10)
    encode_length(se, 10)
    with pytest.raises(LengthOverflowError):
        encode_length(se, 11)

    de = Deserializer.build_bytes_deserializer(bytes([10, 11]), max_sequence_length=10)
    assert decode_length(de) == 10
    with pytest.raises(LengthOverflowError):
        decode_length(de)


def test_default_length_limit() -> None:
    # 2**31 is a valid u32 but is above the default sequence length limit
    se = Serializer.build_bytes_serializer()
    encode_uleb128(se, 2**31)
    data = bytes(se.finalize())
    assert data.hex() == '8080808008'
    with pytest.raises(LengthOverflowError):
        decode_length(Deserializer.build_bytes_deserializer(data))
    assert decode_variant_index(Deserializer.build_bytes_deserializer(data)) == 2**31


def test_variant_index_uses_the_whole_u32_range() -> None:
    se = Serializer.build_bytes_serializer()
    encode_variant_index(se, 2**32 - 1)
    data = bytes(se.finalize())
    assert data.hex() == 'ffffffff0f'
    assert decode_variant_index(Deserializer.build_bytes_deserializer(data)) == 2**32 - 1
