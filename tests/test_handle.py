"""Tests for the simulated unmanaged handle table."""

import pytest

from dispose_python import NULL_HANDLE, HandleTable
from dispose_python._runtime.handle import CountIdAllocator


def test_allocator_counts_up_from_initial_value() -> None:
    allocator = CountIdAllocator(5)

    assert [allocator.acquire() for _ in range(3)] == [5, 6, 7]


def test_allocate_returns_distinct_non_null_handles(handle_table: HandleTable) -> None:
    handles = [handle_table.allocate() for _ in range(10)]

    assert NULL_HANDLE not in handles
    assert len(set(handles)) == 10
    assert handle_table.live_count == 10
    assert handle_table.freed_count == 0


def test_free_moves_handle_from_live_to_freed(handle_table: HandleTable) -> None:
    handle = handle_table.allocate()
    assert handle_table.is_live(handle)

    handle_table.free(handle)

    assert not handle_table.is_live(handle)
    assert handle_table.live_count == 0
    assert handle_table.freed_count == 1


def test_double_free_is_rejected(handle_table: HandleTable) -> None:
    handle = handle_table.allocate()
    handle_table.free(handle)

    with pytest.raises(ValueError, match="already freed"):
        handle_table.free(handle)
    assert handle_table.freed_count == 1


def test_null_and_unknown_handles_are_rejected(handle_table: HandleTable) -> None:
    with pytest.raises(ValueError, match="null handle"):
        handle_table.free(NULL_HANDLE)
    with pytest.raises(ValueError, match="Unknown handle"):
        handle_table.free(0x7F)


def test_handles_are_never_reused(handle_table: HandleTable) -> None:
    first = handle_table.allocate()
    handle_table.free(first)

    assert handle_table.allocate() != first


def test_freed_handles_are_counted_not_stored(handle_table: HandleTable) -> None:
    handles = [handle_table.allocate() for _ in range(1000)]
    for handle in handles:
        handle_table.free(handle)

    assert handle_table.freed_count == 1000
    assert handle_table.live_count == 0
    # Nothing per-handle survives a free
    for value in vars(handle_table).values():
        if isinstance(value, (set, dict, list)):
            assert len(value) == 0

    # Double frees are still recognised without the history
    with pytest.raises(ValueError, match="already freed"):
        handle_table.free(handles[0])
    with pytest.raises(ValueError, match="already freed"):
        handle_table.free(handles[-1])
    with pytest.raises(ValueError, match="Unknown handle"):
        handle_table.free(handles[-1] + 1)
