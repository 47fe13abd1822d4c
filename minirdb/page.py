"""Slotted pages of fixed size."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from typing import Optional

PAGE_SIZE = 64
HEADER_SIZE = 8
SLOT_SIZE = 4

# Header: page_id u32, tuple_count u16, free_space_offset u16.
_HEADER = struct.Struct("=IHH")
_COUNTS = struct.Struct("=HH")
_SLOT = struct.Struct("=HH")


class PageFullError(Exception):
    """Raised when a tuple does not fit in a page."""


class Page:
    """A page whose slot array grows forward and tuple data grows backward."""

    __slots__ = ("data",)

    def __init__(self, page_id: int = 0) -> None:
        self.data = bytearray(PAGE_SIZE)
        _HEADER.pack_into(self.data, 0, page_id, 0, PAGE_SIZE)

    @classmethod
    def from_bytes(cls, data: bytes) -> Page:
        """Build a page from its raw PAGE_SIZE bytes."""
        if len(data) != PAGE_SIZE:
            raise ValueError(f"page data must be {PAGE_SIZE} bytes, got {len(data)}")
        page = cls()
        page.data[:] = data
        return page

    def page_id(self) -> int:
        return _HEADER.unpack_from(self.data)[0]

    def tuple_count(self) -> int:
        return _HEADER.unpack_from(self.data)[1]

    def free_space_offset(self) -> int:
        return _HEADER.unpack_from(self.data)[2]

    def _set_counts(self, tuple_count: int, free_space_offset: int) -> None:
        _COUNTS.pack_into(self.data, 4, tuple_count, free_space_offset)

    def _slot(self, slot_id: int) -> tuple[int, int]:
        return _SLOT.unpack_from(self.data, HEADER_SIZE + slot_id * SLOT_SIZE)

    def free_space(self) -> int:
        """Bytes between the end of the slot array and the start of tuple data."""
        slots_end = HEADER_SIZE + self.tuple_count() * SLOT_SIZE
        return self.free_space_offset() - slots_end

    def insert(self, tuple_data: bytes) -> int:
        """Store a tuple and return its slot id."""
        length = len(tuple_data)
        if self.free_space() < length + SLOT_SIZE:
            raise PageFullError("not enough space in page")
        new_offset = self.free_space_offset() - length
        self.data[new_offset : new_offset + length] = tuple_data
        slot_id = self.tuple_count()
        _SLOT.pack_into(self.data, HEADER_SIZE + slot_id * SLOT_SIZE, new_offset, length)
        self._set_counts(slot_id + 1, new_offset)
        return slot_id

    def get_tuple(self, slot_id: int) -> Optional[bytes]:
        """Return the tuple in a slot, or None if there is no such slot."""
        if not 0 <= slot_id < self.tuple_count():
            return None
        offset, length = self._slot(slot_id)
        return bytes(self.data[offset : offset + length])

    def tuples(self) -> Iterator[bytes]:
        """Yield every stored tuple in slot order."""
        for slot_id in range(self.tuple_count()):
            data = self.get_tuple(slot_id)
            if data is not None:
                yield data