"""Column types, schemas and the binary encoding of rows."""

from __future__ import annotations

import enum
import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

Value = Union[None, bool, int, str]

_INT = struct.Struct("=i")
_LENGTH = struct.Struct("=I")
_BOOL = struct.Struct("=B")


class DataType(enum.Enum):
    """Storage type of a column."""

    INT = "int"
    VARCHAR = "varchar"
    BOOL = "bool"


@dataclass(frozen=True)
class Column:
    """A named, typed column."""

    name: str
    data_type: DataType


@dataclass
class Schema:
    """Ordered list of columns describing a row."""

    columns: list[Column] = field(default_factory=list)


def _null_bitmap_size(num_columns: int) -> int:
    return (num_columns + 7) // 8


def _encode_value(value: Value) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bool):
        return _BOOL.pack(1 if value else 0)
    if isinstance(value, int):
        try:
            return _INT.pack(value)
        except struct.error as exc:
            raise ValueError(f"integer out of 32-bit range: {value}") from exc
    if isinstance(value, str):
        raw = value.encode("utf-8")
        return _LENGTH.pack(len(raw)) + raw
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def serialize_tuple(values: Iterable[Value]) -> bytes:
    """Encode a row: a null bitmap (bit set means not null), then each value."""
    values = list(values)
    bitmap = bytearray(_null_bitmap_size(len(values)))
    for index, value in enumerate(values):
        if value is not None:
            bitmap[index // 8] |= 1 << (index % 8)
    return bytes(bitmap) + b"".join(_encode_value(value) for value in values)


def _require(data: bytes, offset: int, size: int) -> None:
    if offset + size > len(data):
        raise ValueError(
            f"truncated tuple: need {size} bytes at offset {offset}, have {len(data) - offset}"
        )


def _decode_value(data: bytes, offset: int, data_type: DataType) -> tuple[Value, int]:
    if data_type is DataType.INT:
        _require(data, offset, _INT.size)
        (value,) = _INT.unpack_from(data, offset)
        return value, offset + _INT.size
    if data_type is DataType.VARCHAR:
        _require(data, offset, _LENGTH.size)
        (length,) = _LENGTH.unpack_from(data, offset)
        start = offset + _LENGTH.size
        _require(data, start, length)
        return data[start : start + length].decode("utf-8"), start + length
    _require(data, offset, _BOOL.size)
    return data[offset] != 0, offset + _BOOL.size


def deserialize_tuple(data: bytes, schema: Schema) -> list[Value]:
    """Decode a row encoded by serialize_tuple according to the schema."""
    data = bytes(data)
    bitmap_size = _null_bitmap_size(len(schema.columns))
    _require(data, 0, bitmap_size)
    bitmap = data[:bitmap_size]
    offset = bitmap_size
    values: list[Value] = []
    for index, column in enumerate(schema.columns):
        if not bitmap[index // 8] & (1 << (index % 8)):
            values.append(None)
            continue
        value, offset = _decode_value(data, offset, column.data_type)
        values.append(value)
    return values