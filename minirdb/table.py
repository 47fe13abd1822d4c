"""Heap tables stored in slotted pages through the buffer pool."""

from __future__ import annotations

from collections.abc import Sequence

from minirdb.buffer_pool import BufferPoolManager
from minirdb.page import PageFullError
from minirdb.tuple import Schema, Value, deserialize_tuple, serialize_tuple


class Table:
    """An append-only heap of rows sharing one schema."""

    def __init__(self, bpm: BufferPoolManager, schema: Schema) -> None:
        self._bpm = bpm
        self.schema = schema

    def insert(self, values: Sequence[Value]) -> tuple[int, int]:
        """Append a row and return its (page_id, slot_id)."""
        tuple_data = serialize_tuple(values)

        page_count = self._bpm.page_count()
        if page_count > 0:
            last_page_id = page_count - 1
            page = self._bpm.fetch_page(last_page_id)
            try:
                slot_id = page.insert(tuple_data)
            except PageFullError:
                self._bpm.unpin_page(last_page_id, False)
            else:
                self._bpm.unpin_page(last_page_id, True)
                return last_page_id, slot_id

        page_id, page = self._bpm.new_page()
        try:
            slot_id = page.insert(tuple_data)
        finally:
            self._bpm.unpin_page(page_id, True)
        return page_id, slot_id

    def scan(self) -> list[list[Value]]:
        """Return every row in storage order."""
        results: list[list[Value]] = []
        for page_id in range(self._bpm.page_count()):
            page = self._bpm.fetch_page(page_id)
            try:
                results.extend(
                    deserialize_tuple(data, self.schema) for data in page.tuples()
                )
            finally:
                self._bpm.unpin_page(page_id, False)
        return results

    def flush(self) -> None:
        self._bpm.flush_all()

    def page_count(self) -> int:
        return self._bpm.page_count()