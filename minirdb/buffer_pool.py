"""A small buffer pool caching pages in memory with LRU replacement."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import Optional

from minirdb.disk import DiskManager
from minirdb.page import Page

BUFFER_POOL_SIZE = 3

logger = logging.getLogger(__name__)


class BufferPoolError(Exception):
    """Raised on misuse of the buffer pool or when no frame can be freed."""


class Replacer(abc.ABC):
    """Page replacement policy over frame ids."""

    @abc.abstractmethod
    def victim(self) -> Optional[int]:
        """Return a frame that may be evicted, or None."""

    @abc.abstractmethod
    def pin(self, frame_id: int) -> None:
        """Mark a frame as in use and not evictable."""

    @abc.abstractmethod
    def unpin(self, frame_id: int) -> None:
        """Mark a frame as evictable."""


class LruReplacer(Replacer):
    """Evicts the least recently pinned frame that is no longer pinned."""

    def __init__(self, size: int) -> None:
        self._order: dict[int, None] = {}
        self._pinned = [True] * size

    def victim(self) -> Optional[int]:
        return next((fid for fid in self._order if not self._pinned[fid]), None)

    def pin(self, frame_id: int) -> None:
        self._pinned[frame_id] = True
        self._order.pop(frame_id, None)
        self._order[frame_id] = None

    def unpin(self, frame_id: int) -> None:
        self._pinned[frame_id] = False


@dataclass
class _Frame:
    page: Page = field(default_factory=Page)
    page_id: Optional[int] = None
    pin_count: int = 0
    is_dirty: bool = False


class BufferPoolManager:
    """Keeps up to pool_size pages in memory on top of a DiskManager."""

    def __init__(
        self,
        disk_manager: DiskManager,
        replacer: Optional[Replacer] = None,
        pool_size: int = BUFFER_POOL_SIZE,
    ) -> None:
        self._disk = disk_manager
        self._replacer = replacer if replacer is not None else LruReplacer(pool_size)
        self._frames = [_Frame() for _ in range(pool_size)]
        self._page_table: dict[int, int] = {}

    def _evict(self, frame_id: int) -> None:
        frame = self._frames[frame_id]
        if frame.page_id is not None:
            logger.info("Evicting page %d (dirty: %s)", frame.page_id, frame.is_dirty)
            if frame.is_dirty:
                self._disk.write_page(frame.page_id, bytes(frame.page.data))
            del self._page_table[frame.page_id]
        frame.page_id = None
        frame.is_dirty = False
        frame.pin_count = 0

    def _acquire_frame(self) -> int:
        if len(self._page_table) < len(self._frames):
            return next(
                fid for fid, frame in enumerate(self._frames) if frame.page_id is None
            )
        victim = self._replacer.victim()
        if victim is None:
            raise BufferPoolError("no victim frame")
        self._evict(victim)
        return victim

    def _install(self, frame_id: int, page_id: int, page: Page, dirty: bool) -> Page:
        frame = self._frames[frame_id]
        frame.page = page
        frame.page_id = page_id
        frame.pin_count = 1
        frame.is_dirty = dirty
        self._page_table[page_id] = frame_id
        self._replacer.pin(frame_id)
        return page

    def fetch_page(self, page_id: int) -> Page:
        """Pin a page, reading it from disk if it is not cached."""
        frame_id = self._page_table.get(page_id)
        if frame_id is not None:
            self._frames[frame_id].pin_count += 1
            self._replacer.pin(frame_id)
            return self._frames[frame_id].page
        frame_id = self._acquire_frame()
        logger.info("Fetching page %d from disk", page_id)
        page = Page.from_bytes(self._disk.read_page(page_id))
        return self._install(frame_id, page_id, page, dirty=False)

    def new_page(self) -> tuple[int, Page]:
        """Allocate a new page on disk and return it pinned."""
        frame_id = self._acquire_frame()
        page_id = self._disk.allocate_page()
        logger.info("Allocating new page %d", page_id)
        return page_id, self._install(frame_id, page_id, Page(page_id), dirty=True)

    def unpin_page(self, page_id: int, is_dirty: bool) -> None:
        """Release one pin on a page, marking it dirty if it was modified."""
        frame_id = self._page_table.get(page_id)
        if frame_id is None:
            raise BufferPoolError(f"page {page_id} not in buffer pool")
        frame = self._frames[frame_id]
        if frame.pin_count == 0:
            raise BufferPoolError(f"page {page_id} is not pinned")
        frame.pin_count -= 1
        if frame.pin_count == 0:
            self._replacer.unpin(frame_id)
        if is_dirty:
            frame.is_dirty = True

    def flush_all(self) -> None:
        """Write every dirty cached page back to disk."""
        for page_id, frame_id in list(self._page_table.items()):
            frame = self._frames[frame_id]
            if frame.is_dirty:
                self._disk.write_page(page_id, bytes(frame.page.data))
                frame.is_dirty = False

    def page_count(self) -> int:
        return self._disk.page_count()