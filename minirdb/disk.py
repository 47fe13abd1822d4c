"""Page-granular access to a database file."""

from __future__ import annotations

import os
from typing import Union

from minirdb.page import PAGE_SIZE

PathLike = Union[str, "os.PathLike[str]"]


class DiskManager:
    """Reads and writes fixed-size pages of a single file."""

    def __init__(self, path: PathLike) -> None:
        flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
        fd = os.open(os.fspath(path), flags, 0o644)
        self._file = os.fdopen(fd, "r+b")
        self._page_count = os.fstat(fd).st_size // PAGE_SIZE

    def __enter__(self) -> DiskManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _offset(page_id: int) -> int:
        if page_id < 0:
            raise ValueError(f"invalid page id: {page_id}")
        return page_id * PAGE_SIZE

    def read_page(self, page_id: int) -> bytes:
        """Return the raw bytes of a page."""
        self._file.seek(self._offset(page_id))
        data = self._file.read(PAGE_SIZE)
        if len(data) < PAGE_SIZE:
            raise EOFError(f"page {page_id} lies beyond the end of the file")
        return data

    def write_page(self, page_id: int, data: bytes) -> None:
        """Write a page and force it to stable storage."""
        if len(data) != PAGE_SIZE:
            raise ValueError(f"page data must be {PAGE_SIZE} bytes, got {len(data)}")
        self._file.seek(self._offset(page_id))
        self._file.write(data)
        self._file.flush()
        os.fsync(self._file.fileno())

    def allocate_page(self) -> int:
        """Extend the file by one zeroed page and return its id."""
        page_id = self._page_count
        self._page_count += 1
        self.write_page(page_id, bytes(PAGE_SIZE))
        return page_id

    def page_count(self) -> int:
        return self._page_count

    def close(self) -> None:
        self._file.close()

    @property
    def closed(self) -> bool:
        return self._file.closed