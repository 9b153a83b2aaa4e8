from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import pytest

from canonser.serialization import TrailingDataError, UnexpectedEndOfInputError, UnknownVariantTagError
from canonser.shapes import make_shape
from canonser.types import SumType, char, float32, int16, uint8, uint32, uint64


@dataclass(frozen=True)
class Point:
    x: int16
    y: int16


@dataclass
class Unit:
    pass


class Pair(NamedTuple):
    first: uint8
    second: str


@dataclass
class Everything:
    flag: bool
    small: uint8
    big: uint64
    ratio: float32
    precise: float
    letter: char
    name: str
    blob: bytes
    maybe: Optional[uint32]
    items: list[Point]
    tags: frozenset[str]
    scores: dict[str, uint32]
    pair: Pair
    unit: Unit
    anon: tuple[bool, str]


class Shape2D(SumType):
    pass


@dataclass
class Circle(Shape2D):
    center: Point
    radius: uint32


@dataclass
class Square(Shape2D):
    corner: Point
    side: uint32


@dataclass
class Nothing(Shape2D, tag=10):
    pass


def test_struct_fields_in_declaration_order() -> None:
    shape = make_shape(Point)
    assert shape.to_bytes(Point(1, -1)) == bytes.fromhex('0100' 'ffff')
    assert shape.from_bytes(bytes.fromhex('0100ffff')) == Point(1, -1)


def test_unit_struct_is_empty() -> None:
    assert make_shape(Unit).to_bytes(Unit()) == b''
    assert make_shape(Unit).from_bytes(b'') == Unit()
    with pytest.raises(TrailingDataError):
        make_shape(Unit).from_bytes(b'\x00')


def test_tuple_struct() -> None:
    shape = make_shape(Pair)
    assert shape.to_bytes(Pair(3, 'ab')) == bytes.fromhex('03' '026162')
    value = shape.from_bytes(bytes.fromhex('03026162'))
    assert value == Pair(3, 'ab')
    assert isinstance(value, Pair)


def test_round_trip_everything() -> None:
    value = Everything(
        flag=True,
        small=255,
        big=2**64 - 1,
        ratio=0.25,
        precise=0.1,
        letter='ß',
        name='canonical',
        blob=b'\x00\x01\x02',
        maybe=None,
        items=[Point(1, 2), Point(-3, 4)],
        tags=frozenset({'b', 'a', 'c'}),
        scores={'x': 1, 'y': 2},
        pair=Pair(9, 'nine'),
        unit=Unit(),
        anon=(False, ''),
    )
    shape = make_shape(Everything)
    data = shape.to_bytes(value)
    assert shape.from_bytes(data) == value
    # the encoding is a function of the value
    same_value = Everything(**{**value.__dict__, 'tags': frozenset({'c', 'b', 'a'}), 'scores': {'y': 2, 'x': 1}})
    assert shape.to_bytes(same_value) == data


def test_truncated_struct() -> None:
    shape = make_shape(Point)
    data = shape.to_bytes(Point(5, 6))
    for i in range(len(data)):
        with pytest.raises(UnexpectedEndOfInputError):
            shape.from_bytes(data[:i])


def test_enum_tags() -> None:
    assert Circle.variant_tag() == 0
    assert Square.variant_tag() == 1
    assert Nothing.variant_tag() == 10
    assert list(Shape2D.variants()) == [0, 1, 10]

    shape = make_shape(Shape2D)
    assert shape.to_bytes(Circle(Point(0, 0), 3)) == bytes.fromhex('00' '00000000' '03000000')
    assert shape.to_bytes(Square(Point(1, 1), 2)) == bytes.fromhex('01' '01000100' '02000000')
    assert shape.to_bytes(Nothing()) == bytes.fromhex('0a')

    assert shape.from_bytes(bytes.fromhex('0a')) == Nothing()
    assert shape.from_bytes(bytes.fromhex('01' '01000100' '02000000')) == Square(Point(1, 1), 2)


def test_enum_unknown_tag() -> None:
    shape = make_shape(Shape2D)
    for tag in (2, 9, 11, 0x7f):
        with pytest.raises(UnknownVariantTagError):
            shape.from_bytes(bytes([tag]))


def test_enum_inside_containers() -> None:
    shape = make_shape(list[Optional[Shape2D]])
    value = [Nothing(), None, Circle(Point(0, 1), 2)]
    assert shape.from_bytes(shape.to_bytes(value)) == value


def test_variant_is_not_a_type_of_its_own() -> None:
    with pytest.raises(TypeError):
        make_shape(Circle)


def test_enum_rejects_other_values() -> None:
    shape = make_shape(Shape2D)
    with pytest.raises(TypeError):
        shape.to_bytes(Point(1, 1))
    with pytest.raises(TypeError):
        shape.to_bytes(None)


def test_duplicate_tag() -> None:
    class Color(SumType):
        pass

    @dataclass
    class Red(Color, tag=1):
        pass

    with pytest.raises(TypeError):
        @dataclass
        class Green(Color, tag=1):
            pass


def test_tag_out_of_range() -> None:
    class Kind(SumType):
        pass

    with pytest.raises(TypeError):
        class Negative(Kind, tag=-1):
            pass

    with pytest.raises(TypeError):
        class TooBig(Kind, tag=2**32):
            pass


def test_large_tag() -> None:
    class Big(SumType):
        pass

    @dataclass
    class Last(Big, tag=2**32 - 1):
        value: uint8

    shape = make_shape(Big)
    assert shape.to_bytes(Last(1)) == bytes.fromhex('ffffffff0f' '01')
    assert shape.from_bytes(bytes.fromhex('ffffffff0f01')) == Last(1)


def test_variants_cannot_be_subclassed() -> None:
    class Base(SumType):
        pass

    @dataclass
    class Leaf(Base):
        pass

    with pytest.raises(TypeError):
        class SubLeaf(Leaf):
            pass


def test_init_false_fields_are_not_supported() -> None:
    @dataclass
    class Computed:
        value: uint8
        cached: uint8 = field(init=False, default=0)

    with pytest.raises(TypeError):
        make_shape(Computed)


def test_invalid_values() -> None:
    shape = make_shape(Point)
    with pytest.raises(ValueError):
        shape.to_bytes(Point(2**15, 0))
    with pytest.raises(TypeError):
        shape.to_bytes(Point(True, 0))
    with pytest.raises(TypeError):
        shape.to_bytes(Point('1', 0))  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        make_shape(float32).to_bytes(0.1)
    with pytest.raises(TypeError):
        make_shape(float).to_bytes(1)
    with pytest.raises(ValueError):
        make_shape(char).to_bytes('ab')
    with pytest.raises(ValueError):
        make_shape(str).to_bytes('\ud800')


def test_check_value_is_deep() -> None:
    shape = make_shape(dict[str, list[uint8]])
    shape.check_value({'a': [1, 2, 255]})
    with pytest.raises(ValueError):
        shape.check_value({'a': [1, 2, 256]})
    with pytest.raises(TypeError):
        shape.check_value({1: [1]})
