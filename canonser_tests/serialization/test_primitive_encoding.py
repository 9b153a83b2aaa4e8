import math
import struct

import pytest

from canonser.serialization import (
    Deserializer,
    InvalidBooleanError,
    InvalidCharError,
    InvalidUtf8Error,
    Serializer,
    UnexpectedEndOfInputError,
)
from canonser.serialization.encoding.bool import decode_bool, encode_bool
from canonser.serialization.encoding.bytes import decode_bytes, encode_bytes
from canonser.serialization.encoding.char import decode_char, encode_char
from canonser.serialization.encoding.float import decode_float, encode_float
from canonser.serialization.encoding.int import decode_int, encode_int
from canonser.serialization.encoding.utf8 import decode_utf8, encode_utf8


def _encode(encoder, value, **kwargs) -> bytes:
    se = Serializer.build_bytes_serializer()
    encoder(se, value, **kwargs)
    return bytes(se.finalize())


def _decode(decoder, data: bytes, **kwargs):
    de = Deserializer.build_bytes_deserializer(data)
    value = decoder(de, **kwargs)
    de.finalize()
    return value


def test_bool() -> None:
    assert _encode(encode_bool, False) == b'\x00'
    assert _encode(encode_bool, True) == b'\x01'
    assert _decode(decode_bool, b'\x00') is False
    assert _decode(decode_bool, b'\x01') is True


@pytest.mark.parametrize('byte', [0x02, 0x10, 0x80, 0xff])
def test_bool_rejects_other_bytes(byte):
    with pytest.raises(InvalidBooleanError):
        _decode(decode_bool, bytes([byte]))


@pytest.mark.parametrize('length, signed, fmt', [
    (1, True, '<b'),
    (1, False, '<B'),
    (2, True, '<h'),
    (2, False, '<H'),
    (4, True, '<i'),
    (4, False, '<I'),
    (8, True, '<q'),
    (8, False, '<Q'),
])
def test_int_matches_struct(length, signed, fmt):
    bits = length * 8
    lower = -(1 << (bits - 1)) if signed else 0
    upper = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
    for value in (lower, lower + 1, 0, 1, upper - 1, upper):
        data = _encode(encode_int, value, length=length, signed=signed)
        assert data == struct.pack(fmt, value)
        assert _decode(decode_int, data, length=length, signed=signed) == value
    with pytest.raises(ValueError):
        _encode(encode_int, upper + 1, length=length, signed=signed)
    with pytest.raises(ValueError):
        _encode(encode_int, lower - 1, length=length, signed=signed)


def test_int128() -> None:
    data = _encode(encode_int, -2, length=16, signed=True)
    assert data == b'\xfe' + b'\xff' * 15
    assert _decode(decode_int, data, length=16, signed=True) == -2
    assert _decode(decode_int, data, length=16, signed=False) == 2**128 - 2


def test_u64_max() -> None:
    data = _encode(encode_int, 18446744073709551615, length=8, signed=False)
    assert data == bytes.fromhex('ffffffffffffffff')
    assert _decode(decode_int, data, length=8, signed=False) == 18446744073709551615


def test_int_unexpected_end() -> None:
    with pytest.raises(UnexpectedEndOfInputError):
        _decode(decode_int, b'\x01\x02\x03', length=4, signed=False)


def test_float_bit_patterns() -> None:
    assert _encode(encode_float, 0.0, length=8) == bytes(8)
    assert _encode(encode_float, -0.0, length=8) == bytes(7) + b'\x80'
    assert _encode(encode_float, math.inf, length=4) == bytes.fromhex('0000807f')
    assert _encode(encode_float, 0.5, length=4) == bytes.fromhex('0000003f')

    negative_zero = _decode(decode_float, bytes(7) + b'\x80', length=8)
    assert negative_zero == 0.0
    assert math.copysign(1.0, negative_zero) == -1.0


def test_float_f32_must_be_exact() -> None:
    with pytest.raises(ValueError):
        _encode(encode_float, 0.1, length=4)
    with pytest.raises(ValueError):
        _encode(encode_float, 1e300, length=4)
    # but it is fine as a f64
    assert _decode(decode_float, _encode(encode_float, 0.1, length=8), length=8) == 0.1


@pytest.mark.parametrize('hex_bits', [
    '0100807f',  # signaling NaN
    '0100c07f',  # quiet NaN, same payload
    '0000c0ff',  # negative quiet NaN
    'ffffff7f',  # all payload bits set
    '0000807f',  # inf
    '01000000',  # smallest subnormal
])
def test_float_f32_bits_survive(hex_bits: str) -> None:
    data = bytes.fromhex(hex_bits)
    assert _encode(encode_float, _decode(decode_float, data, length=4), length=4) == data


def test_float_f32_signaling_and_quiet_nan_stay_distinct() -> None:
    signaling = _decode(decode_float, bytes.fromhex('0100807f'), length=4)
    quiet = _decode(decode_float, bytes.fromhex('0100c07f'), length=4)
    assert math.isnan(signaling) and math.isnan(quiet)
    assert struct.pack('<d', signaling) != struct.pack('<d', quiet)
    assert _encode(encode_float, math.nan, length=4) == bytes.fromhex('0000c07f')


def test_float_f32_rejects_wide_nan_payload() -> None:
    wide_nan, = struct.unpack('<d', bytes.fromhex('010000000000f87f'))
    with pytest.raises(ValueError):
        _encode(encode_float, wide_nan, length=4)
    assert _encode(encode_float, wide_nan, length=8) == bytes.fromhex('010000000000f87f')


@pytest.mark.parametrize('value', ['a', '\x00', 'é', '€', '\U0001f600', '\U0010ffff'])
def test_char(value):
    data = _encode(encode_char, value)
    assert data == ord(value).to_bytes(4, 'little')
    assert _decode(decode_char, data) == value


@pytest.mark.parametrize('code_point', [0xd800, 0xdfff, 0x110000, 0xffffffff])
def test_char_rejects_invalid_code_points(code_point):
    with pytest.raises(InvalidCharError):
        _decode(decode_char, code_point.to_bytes(4, 'little'))


def test_char_rejects_surrogates_on_encode() -> None:
    with pytest.raises(ValueError):
        _encode(encode_char, '\ud800')


def test_utf8() -> None:
    assert _encode(encode_utf8, '') == b'\x00'
    assert _encode(encode_utf8, 'abc') == b'\x03abc'
    assert _encode(encode_utf8, 'ação') == b'\x06' + 'ação'.encode('utf-8')
    assert _decode(decode_utf8, b'\x06' + 'ação'.encode('utf-8')) == 'ação'


@pytest.mark.parametrize('data', [
    b'\x01\xff',
    b'\x02\xc3\x28',
    b'\x03\xed\xa0\x80',  # encoded surrogate
    b'\x02\xc0\x80',  # overlong encoding of NUL
])
def test_utf8_rejects_malformed_input(data):
    with pytest.raises(InvalidUtf8Error):
        _decode(decode_utf8, data)


def test_bytes() -> None:
    blob = bytes(range(200))
    data = _encode(encode_bytes, blob)
    assert data[:2] == b'\xc8\x01'
    assert data[2:] == blob
    value = _decode(decode_bytes, data)
    assert type(value) is bytes
    assert value == blob


def test_bytes_unexpected_end() -> None:
    with pytest.raises(UnexpectedEndOfInputError):
        _decode(decode_bytes, b'\x05abc')
