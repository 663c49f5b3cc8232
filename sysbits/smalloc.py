"""A malloc over a fixed, pre-sized block of simulated memory.

Addresses are plain integers inside the managed region; the bookkeeping
(block headers, best-fit search, splitting and coalescing of free blocks)
follows a classic free-list allocator.
"""

from __future__ import annotations

import bisect
from collections.abc import Callable
from dataclasses import dataclass

ALIGNMENT = 8
OVERHEAD = 24
HEADER_SIZE = 64
MINNODE = 64 * ALIGNMENT
_INT_MAX = 2**31 - 1


def _align(size: int) -> int:
    return (size + ALIGNMENT - 1) & ~(ALIGNMENT - 1)


@dataclass(eq=False)
class _Block:
    addr: int
    rsize: int
    usize: int = 0

    @property
    def user_address(self) -> int:
        return self.addr + OVERHEAD

    @property
    def end(self) -> int:
        return self.addr + OVERHEAD + self.rsize


def _adjacent(first: _Block, second: _Block) -> bool:
    return first.end == second.addr


class OutOfMemory(MemoryError):
    """No free block is large enough for the request."""


class StaticAllocator:
    """Best-fit allocator over a region of *size* bytes.

    *log*, if given, is called with a message for every warning or error.
    """

    def __init__(self, size: int, log: Callable[[str], object] | None = None) -> None:
        self._log = log
        if size < MINNODE:
            message = (
                "smalloc: specified memory chunk is too small!  "
                f"Please give at least {MINNODE} size bytes!"
            )
            self._emit(message)
            raise ValueError(message)
        first = _Block(HEADER_SIZE, size - OVERHEAD - HEADER_SIZE)
        self._available: list[_Block] = [first]
        self._allocated: dict[int, _Block] = {}
        self._total = 0
        self._free = first.rsize

    def _emit(self, message: str) -> None:
        if self._log is not None:
            self._log(message)

    def _index(self, addr: int) -> int:
        return bisect.bisect_right(self._available, addr, key=lambda block: block.addr)

    def _release(self, block: _Block) -> None:
        """Add *block* to the free list, merging it with adjacent free blocks."""
        index = self._index(block.addr)
        lower = self._available[index - 1] if index > 0 else None
        higher = self._available[index] if index < len(self._available) else None

        if lower is not None and _adjacent(lower, block):
            lower.rsize += OVERHEAD + block.rsize
            if higher is not None and _adjacent(lower, higher):
                self._available.remove(higher)
                lower.rsize += OVERHEAD + higher.rsize
            return

        self._available.insert(index, block)
        if higher is not None and _adjacent(block, higher):
            self._available.remove(higher)
            block.rsize += OVERHEAD + higher.rsize

    def _best_fit(self, size: int) -> _Block:
        aligned = _align(size)
        best_over = _INT_MAX
        chosen: _Block | None = None
        head = self._available[-1] if self._available else None
        for block in reversed(self._available):
            if block.rsize >= size:
                over = block.rsize - size
                if over < best_over or block is head:
                    best_over = over
                    chosen = block

        if chosen is None:
            message = (
                f"smalloc: OUT OF MEMORY!  Requested: {size}  "
                f"Total Allocated: {self._total}  Total Free: {self._free}"
            )
            self._emit(message)
            raise OutOfMemory(message)

        self._available.remove(chosen)
        if chosen.rsize >= aligned + OVERHEAD + MINNODE:
            leftover = chosen.rsize - aligned - OVERHEAD
            chosen.rsize = aligned
            self._release(_Block(chosen.end, leftover))

        chosen.usize = size
        self._allocated[chosen.user_address] = chosen
        return chosen

    def malloc(self, size: int) -> int:
        """Allocate *size* bytes and return the address of the block."""
        if size < 0:
            raise ValueError("size must not be negative")
        if size == 0:
            self._emit("smalloc: attempt to allocate 0 bytes")
        try:
            block = self._best_fit(size)
        except OutOfMemory:
            self._emit(f"smalloc: unable to allocate {size} bytes")
            raise
        self._total += size
        self._free -= block.rsize + OVERHEAD
        return block.user_address

    def free(self, address: int | None) -> None:
        """Return the block at *address* to the free list.

        Freeing None only logs; freeing anything not allocated raises ValueError.
        """
        if address is None:
            self._emit("smalloc: attempt to free NULL")
            return
        block = self._allocated.pop(address, None)
        if block is None:
            message = f"smalloc: attempt to free unallocated memory (0x{address:x})"
            self._emit(message)
            raise ValueError(message)
        self._free += block.rsize + OVERHEAD
        self._release(block)
        self._total -= block.usize

    def add_memory_chunk(self, address: int, size: int) -> None:
        """Hand the allocator another region of *size* bytes starting at *address*."""
        if size < MINNODE:
            message = (
                "smalloc: attempt to add a memory chunk that is too small!  "
                f"Please add memory chunks of at least {MINNODE} size bytes!"
            )
            self._emit(message)
            raise ValueError(message)
        block = _Block(address, size - OVERHEAD)
        self._free += block.rsize
        self._release(block)

    def destroy(self) -> None:
        """Forget every block; nothing can be allocated afterwards."""
        self._available = []
        self._allocated = {}
        self._total = 0
        self._free = 0

    @property
    def allocated_bytes(self) -> int:
        """Bytes handed out, as requested by the callers."""
        return self._total

    @property
    def free_bytes(self) -> int:
        """Bytes available in free blocks."""
        return self._free

    @property
    def free_areas(self) -> int:
        """Number of contiguous free blocks."""
        return len(self._available)

    @property
    def allocated_areas(self) -> int:
        """Number of allocated blocks."""
        return len(self._allocated)