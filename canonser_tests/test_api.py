from dataclasses import dataclass
from typing import Optional

import pytest

import canonser
from canonser import (
    DuplicateKeyError,
    InvalidBooleanError,
    InvalidCharError,
    InvalidOptionTagError,
    InvalidUtf8Error,
    LengthOverflowError,
    MapNotCanonicallyOrderedError,
    NonCanonicalLengthError,
    RecursionLimitExceededError,
    SerializationError,
    SinkExhaustedError,
    TrailingDataError,
    UnexpectedEndOfInputError,
    deserialize,
    deserialize_prefix,
    serialize,
)
from canonser.types import SumType, char, float32, float64, uint8, uint32, uint64


@dataclass
class Account:
    owner: str
    balance: uint64
    flags: set[uint8]


class Event(SumType):
    pass


@dataclass
class Deposit(Event):
    amount: uint64


@dataclass
class Withdrawal(Event):
    amount: uint64
    memo: Optional[str]


@dataclass
class Chain:
    next: Optional['Chain']


def test_scenario_u64_max() -> None:
    data = serialize(18446744073709551615, uint64)
    assert data == bytes.fromhex('ff ff ff ff ff ff ff ff')
    assert deserialize(data, uint64) == 18446744073709551615


def test_scenario_empty_option() -> None:
    assert serialize(None, Optional[uint32]) == b'\x00'
    with pytest.raises(UnexpectedEndOfInputError):
        deserialize(b'\x01', Optional[uint32])


def test_scenario_set_order() -> None:
    data = serialize({500, 3}, set[uint64])
    encoded_3 = serialize(3, uint64)
    encoded_500 = serialize(500, uint64)
    assert encoded_3 < encoded_500
    assert data == b'\x02' + encoded_3 + encoded_500
    assert deserialize(data, set[uint64]) == {3, 500}


def test_scenario_deep_recursion() -> None:
    node = Chain(None)
    for _ in range(999):
        node = Chain(node)
    with pytest.raises(RecursionLimitExceededError):
        serialize(node)
    with pytest.raises(RecursionLimitExceededError):
        deserialize(b'\x01' * 999 + b'\x00', Chain)


def test_type_is_inferred() -> None:
    account = Account('alice', 10, {2, 1})
    data = serialize(account)
    assert data == serialize(account, Account)
    assert data == bytes.fromhex('05616c696365' '0a00000000000000' '02' '01' '02')
    assert deserialize(data, Account) == account

    assert serialize('hi') == b'\x02hi'
    assert serialize(b'hi') == b'\x02hi'
    assert serialize(True) == b'\x01'
    assert serialize(None) == b''


def test_variant_type_is_inferred_as_its_enum() -> None:
    data = serialize(Withdrawal(5, 'rent'))
    assert data == bytes.fromhex('01' '0500000000000000' '01' '0472656e74')
    assert deserialize(data, Event) == Withdrawal(5, 'rent')
    assert deserialize(serialize(Deposit(1)), Event) == Deposit(1)


def test_plain_int_needs_a_type() -> None:
    with pytest.raises(TypeError):
        serialize(5)
    assert serialize(5, uint8) == b'\x05'


def test_trailing_data() -> None:
    with pytest.raises(TrailingDataError):
        deserialize(b'\x05\x00', uint8)
    assert deserialize_prefix(b'\x05\x00', uint8) == (5, b'\x00')
    assert deserialize_prefix(b'\x05', uint8) == (5, b'')


def test_deserialize_prefix_concatenated_values() -> None:
    data = serialize('one') + serialize('two') + serialize(7, uint32)
    first, rest = deserialize_prefix(data, str)
    second, rest = deserialize_prefix(rest, str)
    assert (first, second) == ('one', 'two')
    assert deserialize(rest, uint32) == 7


def test_max_bytes() -> None:
    assert serialize('abc', max_bytes=4) == b'\x03abc'
    with pytest.raises(SinkExhaustedError):
        serialize('abcd', max_bytes=4)


@pytest.mark.parametrize('data, type_, error', [
    (b'\x02', bool, InvalidBooleanError),
    (b'\x02\x00', Optional[bool], InvalidOptionTagError),
    (b'\x00\xd8\x00\x00', char, InvalidCharError),
    (b'\x01\x80', str, InvalidUtf8Error),
    (b'\x81\x00', bytes, NonCanonicalLengthError),
    (b'\x80\x80\x80\x80\x10', list[bool], LengthOverflowError),
    (b'\x02\x01b\x00\x01a\x00', dict[str, bool], MapNotCanonicallyOrderedError),
    (b'\x02\x01a\x00\x01a\x01', dict[str, bool], DuplicateKeyError),
    (b'\x02\x01a\x01a', set[str], DuplicateKeyError),
    (b'\x02' + bytes(8) + bytes(7) + b'\x80', set[float64], DuplicateKeyError),
    (b'\x02' + bytes(8) + b'\x00' + bytes(7) + b'\x80\x01', dict[float64, bool], DuplicateKeyError),
    (b'\x05abc', bytes, UnexpectedEndOfInputError),
    (b'', uint8, UnexpectedEndOfInputError),
    (b'\x00\x00', str, TrailingDataError),
])
def test_non_canonical_input_is_rejected(data, type_, error):
    with pytest.raises(error) as e:
        deserialize(data, type_)
    assert isinstance(e.value, SerializationError)
    assert isinstance(e.value, ValueError)


def test_canonical_uniqueness() -> None:
    # every accepted input re-encodes to itself
    for data, type_ in [
        (b'\x03\x01a\x00\x01b\x01\x02aa\x00', dict[str, bool]),
        (b'\x01\x02', Optional[uint8]),
        (b'\x80\x01' + b'\x00' * 128, bytes),
        (bytes.fromhex('0100807f'), float32),
        (bytes.fromhex('010100807f'), list[float32]),
        (b'\x01' + bytes(7) + b'\x80', set[float64]),
    ]:
        assert serialize(deserialize(data, type_), type_) == data


def test_public_api() -> None:
    assert canonser.__version__
    assert canonser.make_shape(uint8).to_bytes(1) == b'\x01'
