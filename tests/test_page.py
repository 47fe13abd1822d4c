import pytest

from minirdb.page import HEADER_SIZE, PAGE_SIZE, SLOT_SIZE, Page, PageFullError


def test_new_page_header():
    page = Page(7)
    assert page.page_id() == 7
    assert page.tuple_count() == 0
    assert page.free_space_offset() == PAGE_SIZE
    assert page.free_space() == PAGE_SIZE - HEADER_SIZE


def test_insert_and_get():
    page = Page(0)
    first = page.insert(b"hello")
    second = page.insert(b"world!")
    assert (first, second) == (0, 1)
    assert page.get_tuple(0) == b"hello"
    assert page.get_tuple(1) == b"world!"
    assert page.tuple_count() == 2


def test_insert_consumes_tuple_and_slot_space():
    page = Page(0)
    before = page.free_space()
    page.insert(b"abcdef")
    assert page.free_space() == before - len(b"abcdef") - SLOT_SIZE
    assert page.free_space_offset() == PAGE_SIZE - len(b"abcdef")


def test_get_missing_slot_returns_none():
    page = Page(0)
    page.insert(b"x")
    assert page.get_tuple(1) is None
    assert page.get_tuple(-1) is None


def test_page_full_leaves_page_unchanged():
    page = Page(0)
    with pytest.raises(PageFullError):
        page.insert(b"x" * PAGE_SIZE)
    assert page.tuple_count() == 0
    assert page.free_space() == PAGE_SIZE - HEADER_SIZE


def test_exact_fit_is_accepted():
    page = Page(0)
    payload = b"y" * (PAGE_SIZE - HEADER_SIZE - SLOT_SIZE)
    assert page.insert(payload) == 0
    assert page.free_space() == 0
    with pytest.raises(PageFullError):
        page.insert(b"")


def test_from_bytes_round_trip():
    page = Page(3)
    page.insert(b"abc")
    copy = Page.from_bytes(bytes(page.data))
    assert copy.page_id() == 3
    assert copy.get_tuple(0) == b"abc"
    assert copy.data == page.data


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        Page.from_bytes(b"\x00" * (PAGE_SIZE - 1))


def test_tuples_in_slot_order():
    page = Page(0)
    items = [b"one", b"two", b"three"]
    for item in items:
        page.insert(item)
    assert list(page.tuples()) == items