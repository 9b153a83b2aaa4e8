from dataclasses import dataclass
from typing import Optional

import pytest

from canonser.serialization import Deserializer, RecursionLimitExceededError, Serializer
from canonser.serialization.consts import MAX_CONTAINER_DEPTH
from canonser.shapes import make_shape
from canonser.types import SumType, uint8


@dataclass
class SimpleList:
    value: Optional['SimpleList']


@dataclass
class Tree:
    label: uint8
    children: list['Tree']


class Expr(SumType):
    pass


@dataclass
class Literal(Expr):
    value: uint8


@dataclass
class Negate(Expr):
    inner: Expr


def _build_simple_list(depth: int) -> SimpleList:
    node = SimpleList(None)
    for _ in range(depth - 1):
        node = SimpleList(node)
    return node


def _list_depth(node: SimpleList) -> int:
    depth = 1
    while node.value is not None:
        node = node.value
        depth += 1
    return depth


def test_recursive_shape_is_shared() -> None:
    shape = make_shape(SimpleList)
    assert shape._fields['value']._inner is shape


def test_simple_list_round_trip() -> None:
    shape = make_shape(SimpleList)
    value = _build_simple_list(50)
    data = shape.to_bytes(value)
    assert data == b'\x01' * 49 + b'\x00'
    decoded = shape.from_bytes(data)
    assert _list_depth(decoded) == 50


def test_simple_list_at_the_limit() -> None:
    shape = make_shape(SimpleList)
    data = shape.to_bytes(_build_simple_list(MAX_CONTAINER_DEPTH))
    assert _list_depth(shape.from_bytes(data)) == MAX_CONTAINER_DEPTH

    with pytest.raises(RecursionLimitExceededError):
        shape.to_bytes(_build_simple_list(MAX_CONTAINER_DEPTH + 1))
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(b'\x01' * MAX_CONTAINER_DEPTH + b'\x00')


def test_simple_list_1000_deep_fails_on_encode() -> None:
    shape = make_shape(SimpleList)
    with pytest.raises(RecursionLimitExceededError):
        shape.to_bytes(_build_simple_list(1000))


def test_simple_list_1000_deep_fails_on_decode() -> None:
    shape = make_shape(SimpleList)
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(b'\x01' * 999 + b'\x00')
    # the limit is hit before running out of input
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(b'\x01' * 1000)


def test_lower_depth_limit() -> None:
    shape = make_shape(SimpleList)
    value = _build_simple_list(5)
    assert shape.to_bytes(value, max_container_depth=5) == b'\x01\x01\x01\x01\x00'
    with pytest.raises(RecursionLimitExceededError):
        shape.to_bytes(value, max_container_depth=4)
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(b'\x01\x01\x01\x01\x00', max_container_depth=4)


def test_depth_is_counted_through_containers() -> None:
    shape = make_shape(Tree)
    leaf = Tree(3, [])
    value = Tree(1, [Tree(2, [leaf]), leaf])
    data = shape.to_bytes(value)
    assert data == bytes.fromhex('01' '02' '02' '01' '03' '00' '03' '00')
    assert shape.from_bytes(data) == value
    # three levels of Tree
    assert shape.from_bytes(data, max_container_depth=3) == value
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(data, max_container_depth=2)


def test_enum_counts_one_level() -> None:
    shape = make_shape(Expr)
    value = Negate(Negate(Literal(7)))
    data = shape.to_bytes(value)
    assert data == bytes.fromhex('01' '01' '00' '07')
    assert shape.from_bytes(data, max_container_depth=3) == value
    with pytest.raises(RecursionLimitExceededError):
        shape.from_bytes(data, max_container_depth=2)
    with pytest.raises(RecursionLimitExceededError):
        shape.to_bytes(value, max_container_depth=2)


def test_depth_is_carried_by_the_cursors() -> None:
    shape = make_shape(SimpleList)
    se = Serializer.build_bytes_serializer(max_container_depth=2)
    shape.serialize(se, _build_simple_list(2))
    assert bytes(se.finalize()) == b'\x01\x00'

    de = Deserializer.build_bytes_deserializer(b'\x01\x00', max_container_depth=2)
    # starting one level down leaves room for a single struct
    with pytest.raises(RecursionLimitExceededError):
        shape.deserialize(de, depth=1)
