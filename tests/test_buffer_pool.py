import pytest

from minirdb.buffer_pool import BufferPoolError, BufferPoolManager, LruReplacer
from minirdb.disk import DiskManager
from minirdb.page import Page


@pytest.fixture
def disk(tmp_path):
    with DiskManager(tmp_path / "pool.db") as manager:
        yield manager


@pytest.fixture
def bpm(disk):
    return BufferPoolManager(disk)


def test_lru_replacer_orders_by_pin_time():
    replacer = LruReplacer(3)
    assert replacer.victim() is None
    replacer.pin(0)
    replacer.pin(1)
    replacer.unpin(0)
    replacer.unpin(1)
    assert replacer.victim() == 0
    replacer.pin(0)
    replacer.unpin(0)
    assert replacer.victim() == 1


def test_lru_replacer_skips_pinned_frames():
    replacer = LruReplacer(2)
    replacer.pin(0)
    replacer.pin(1)
    replacer.unpin(1)
    assert replacer.victim() == 1
    replacer.pin(1)
    assert replacer.victim() is None


def test_new_pages_get_sequential_ids(bpm):
    ids = []
    for _ in range(3):
        page_id, page = bpm.new_page()
        assert page.page_id() == page_id
        ids.append(page_id)
        bpm.unpin_page(page_id, False)
    assert ids == [0, 1, 2]
    assert bpm.page_count() == len(ids)


def test_fetch_cached_page_returns_same_object(bpm):
    page_id, page = bpm.new_page()
    assert bpm.fetch_page(page_id) is page
    assert bpm.fetch_page(page_id) is page
    for _ in range(3):
        bpm.unpin_page(page_id, False)
    with pytest.raises(BufferPoolError, match="not pinned"):
        bpm.unpin_page(page_id, False)


def test_unpin_unknown_page(bpm):
    with pytest.raises(BufferPoolError, match="not in buffer pool"):
        bpm.unpin_page(42, False)


def test_all_frames_pinned(bpm):
    for _ in range(3):
        bpm.new_page()
    with pytest.raises(BufferPoolError, match="no victim frame"):
        bpm.new_page()


def test_eviction_writes_dirty_page(bpm, disk):
    page_id, page = bpm.new_page()
    page.insert(b"abc")
    bpm.unpin_page(page_id, True)
    assert Page.from_bytes(disk.read_page(page_id)).tuple_count() == 0
    for _ in range(3):
        other_id, _ = bpm.new_page()
        bpm.unpin_page(other_id, False)
    assert Page.from_bytes(disk.read_page(page_id)).get_tuple(0) == b"abc"


def test_fetch_after_eviction_reads_from_disk(bpm):
    page_id, page = bpm.new_page()
    page.insert(b"persisted")
    bpm.unpin_page(page_id, True)
    for _ in range(3):
        other_id, _ = bpm.new_page()
        bpm.unpin_page(other_id, False)
    fetched = bpm.fetch_page(page_id)
    assert fetched is not page
    assert fetched.get_tuple(0) == b"persisted"
    bpm.unpin_page(page_id, False)


def test_flush_all_writes_dirty_pages(bpm, disk):
    page_id, page = bpm.new_page()
    page.insert(b"flush me")
    bpm.unpin_page(page_id, True)
    bpm.flush_all()
    assert Page.from_bytes(disk.read_page(page_id)).get_tuple(0) == b"flush me"


def test_custom_pool_size(disk):
    bpm = BufferPoolManager(disk, pool_size=1)
    bpm.new_page()
    with pytest.raises(BufferPoolError):
        bpm.new_page()