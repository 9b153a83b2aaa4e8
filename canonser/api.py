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
Top level functions to encode values to bytes and back, the cursor limits come from the global settings.

>>> from canonser.types import uint16
>>> serialize(300, uint16).hex()
'2c01'
>>> deserialize(bytes.fromhex('2c01'), uint16)
300
>>> deserialize_prefix(bytes.fromhex('2c01ff'), uint16)
(300, b'\xff')
"""

from typing import Any, Optional, TypeVar

from structlog import get_logger

from canonser.conf.get_settings import get_global_settings
from canonser.serialization import Deserializer, SerializationError, Serializer
from canonser.serialization.bytes_deserializer import BytesDeserializer
from canonser.shapes import make_shape
from canonser.types import SumType

logger = get_logger()

T = TypeVar('T')


def serialize(value: Any, type_: Any = None, /, *, max_bytes: Optional[int] = None) -> bytes:
    """ Encode a value with the shape of the given type, by default the type of the value itself.

    Inferring the type only works for types that have a shape on their own, like dataclasses, NamedTuples, enum
    variants, `bool`, `str` and `bytes`. Sized integers and parametrized containers need an explicit type.

    When `max_bytes` is given, a `SinkExhaustedError` is raised if the encoding would be larger.
    """
    if type_ is None:
        type_ = type(value)
        if issubclass(type_, SumType):
            type_ = type_.sum_type()
    shape = make_shape(type_)
    settings = get_global_settings()
    serializer = Serializer.build_bytes_serializer(
        max_container_depth=settings.MAX_CONTAINER_DEPTH,
        max_sequence_length=settings.MAX_SEQUENCE_LENGTH,
    )
    shape.serialize(serializer.with_optional_max_bytes(max_bytes), value)
    return bytes(serializer.finalize())


def deserialize(data: bytes, type_: type[T], /) -> T:
    """ Decode a value of the given type, the whole input must be consumed.

    Any failure is logged and propagated unchanged, there are no partial results.
    """
    deserializer = _build_deserializer(data)
    try:
        value = make_shape(type_).deserialize(deserializer)
        deserializer.finalize()
    except SerializationError as e:
        _log_failure(e, data, deserializer)
        raise
    return value


def deserialize_prefix(data: bytes, type_: type[T], /) -> tuple[T, bytes]:
    """ Decode a value of the given type from the start of the input, and return it with the bytes that follow it.
    """
    deserializer = _build_deserializer(data)
    try:
        value = make_shape(type_).deserialize(deserializer)
    except SerializationError as e:
        _log_failure(e, data, deserializer)
        raise
    return value, bytes(deserializer.read_all())


def _build_deserializer(data: bytes) -> BytesDeserializer:
    settings = get_global_settings()
    return Deserializer.build_bytes_deserializer(
        data,
        max_container_depth=settings.MAX_CONTAINER_DEPTH,
        max_sequence_length=settings.MAX_SEQUENCE_LENGTH,
    )


def _log_failure(error: SerializationError, data: bytes, deserializer: BytesDeserializer) -> None:
    logger.debug('deserialization failed', error=type(error).__name__, size=len(data), pos=deserializer.cur_pos())
