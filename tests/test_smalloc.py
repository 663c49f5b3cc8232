import pytest

from sysbits.smalloc import (
    ALIGNMENT,
    HEADER_SIZE,
    MINNODE,
    OVERHEAD,
    OutOfMemory,
    StaticAllocator,
)

SIZE = 4096


@pytest.fixture
def heap():
    return StaticAllocator(SIZE)


def test_initial_state(heap):
    assert heap.free_bytes == SIZE - OVERHEAD - HEADER_SIZE
    assert heap.free_areas == 1
    assert heap.allocated_areas == 0
    assert heap.allocated_bytes == 0


def test_too_small_region_is_rejected_and_logged():
    messages = []
    with pytest.raises(ValueError):
        StaticAllocator(MINNODE - 1, messages.append)
    assert len(messages) == 1
    assert "too small" in messages[0]


def test_malloc_updates_counters(heap):
    initial = heap.free_bytes
    address = heap.malloc(100)
    assert address == HEADER_SIZE + OVERHEAD
    assert heap.allocated_bytes == 100
    assert heap.allocated_areas == 1
    assert heap.free_areas == 1
    assert heap.free_bytes < initial


def test_free_restores_single_area(heap):
    initial = heap.free_bytes
    address = heap.malloc(100)
    heap.free(address)
    assert heap.free_bytes == initial
    assert heap.free_areas == 1
    assert heap.allocated_bytes == 0
    assert heap.allocated_areas == 0


def test_free_in_any_order_coalesces(heap):
    initial = heap.free_bytes
    a, b, c = heap.malloc(100), heap.malloc(100), heap.malloc(100)
    heap.free(b)
    assert heap.free_areas == 2
    heap.free(a)
    assert heap.free_areas == 2
    heap.free(c)
    assert heap.free_areas == 1
    assert heap.free_bytes == initial


def test_allocations_are_aligned_and_disjoint(heap):
    sizes = [1, 7, 33, 100, 250]
    addresses = [heap.malloc(size) for size in sizes]
    assert all(address % ALIGNMENT == 0 for address in addresses)
    spans = sorted(zip(addresses, sizes))
    for (start, length), (following, _) in zip(spans, spans[1:]):
        assert start + length <= following
    assert heap.allocated_bytes == sum(sizes)


def test_freed_space_is_reused(heap):
    first = heap.malloc(64)
    heap.free(first)
    assert heap.malloc(64) == first


def test_out_of_memory(heap):
    messages = []
    small = StaticAllocator(SIZE, messages.append)
    with pytest.raises(OutOfMemory):
        small.malloc(SIZE)
    assert any("OUT OF MEMORY" in message for message in messages)
    assert small.allocated_areas == 0
    with pytest.raises(MemoryError):
        heap.malloc(SIZE * 2)


def test_free_unallocated_raises(heap):
    heap.malloc(32)
    with pytest.raises(ValueError):
        heap.free(12345)


def test_double_free_raises(heap):
    address = heap.malloc(32)
    heap.free(address)
    with pytest.raises(ValueError):
        heap.free(address)


def test_free_none_only_logs():
    messages = []
    heap = StaticAllocator(SIZE, messages.append)
    before = heap.free_bytes
    heap.free(None)
    assert heap.free_bytes == before
    assert messages == ["smalloc: attempt to free NULL"]


def test_add_memory_chunk_increases_free(heap):
    before = heap.free_bytes
    heap.add_memory_chunk(SIZE * 4, SIZE)
    assert heap.free_bytes == before + SIZE - OVERHEAD
    assert heap.free_areas == 2
    address = heap.malloc(SIZE - OVERHEAD)
    assert address == SIZE * 4 + OVERHEAD


def test_add_adjacent_chunk_merges(heap):
    heap.add_memory_chunk(SIZE, SIZE)
    assert heap.free_areas == 1


def test_add_too_small_chunk_raises(heap):
    with pytest.raises(ValueError):
        heap.add_memory_chunk(SIZE * 4, MINNODE - 1)
    assert heap.free_areas == 1


def test_zero_size_malloc_is_logged():
    messages = []
    heap = StaticAllocator(SIZE, messages.append)
    heap.malloc(0)
    assert "smalloc: attempt to allocate 0 bytes" in messages
    assert heap.allocated_areas == 1


def test_destroy_empties_allocator(heap):
    heap.malloc(10)
    heap.destroy()
    assert heap.free_bytes == 0
    assert heap.allocated_areas == 0
    with pytest.raises(OutOfMemory):
        heap.malloc(1)