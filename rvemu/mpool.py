"""Fixed-size chunk allocator carving page-aligned arenas into equal chunks."""

from __future__ import annotations

import mmap
from typing import Dict, List

# Each chunk in an arena is preceded by a link header of this many bytes.
CHUNK_HEADER_SIZE = 8

PAGE_SIZE = mmap.PAGESIZE


class MemoryPool:
    """A pool handing out ``chunk_size``-byte writable buffers.

    The pool starts with enough pages to hold ``pool_size`` bytes. When every
    chunk is in use, a further arena of the same number of pages is added.
    Freed chunks are reused last-in, first-out.
    """

    def __init__(self, pool_size: int, chunk_size: int):
        if pool_size < 0 or chunk_size <= 0:
            raise ValueError("pool_size must be >= 0 and chunk_size > 0")
        if pool_size < chunk_size + CHUNK_HEADER_SIZE:
            pool_size += CHUNK_HEADER_SIZE
        chunk_count = pool_size // (CHUNK_HEADER_SIZE + chunk_size)
        if chunk_count == 0:
            raise ValueError("pool_size is too small to hold a single chunk")

        self.chunk_size = chunk_size
        self.page_count = (pool_size + PAGE_SIZE - 1) // PAGE_SIZE
        self._arenas: List[bytearray] = []
        self._free: List[memoryview] = []
        self._in_use: Dict[int, memoryview] = {}
        self._closed = False
        self._add_arena(chunk_count)

    def _add_arena(self, chunk_count: int) -> None:
        arena = bytearray(self.page_count * PAGE_SIZE)
        stride = CHUNK_HEADER_SIZE + self.chunk_size
        view = memoryview(arena)
        chunks = [
            view[start + CHUNK_HEADER_SIZE : start + stride]
            for start in range(0, chunk_count * stride, stride)
        ]
        # The free list is a stack: the arena's first chunk is handed out first.
        chunks.reverse()
        self._free.extend(chunks)
        self._arenas.append(arena)

    def _extend(self) -> None:
        pool_size = self.page_count * PAGE_SIZE
        self._add_arena(pool_size // (CHUNK_HEADER_SIZE + self.chunk_size))

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("memory pool has been destroyed")

    @property
    def free_count(self) -> int:
        """Number of chunks available without growing the pool."""
        return len(self._free)

    @property
    def arena_count(self) -> int:
        """Number of arenas the pool has mapped."""
        return len(self._arenas)

    def alloc(self) -> memoryview:
        """Return a chunk; its contents are whatever was last written to it."""
        self._check_open()
        if not self._free:
            self._extend()
        chunk = self._free.pop()
        self._in_use[id(chunk)] = chunk
        return chunk

    def calloc(self) -> memoryview:
        """Return a chunk filled with zero bytes."""
        chunk = self.alloc()
        chunk[:] = bytes(self.chunk_size)
        return chunk

    def free(self, chunk: memoryview) -> None:
        """Give ``chunk`` back to the pool."""
        self._check_open()
        if self._in_use.get(id(chunk)) is not chunk:
            raise ValueError("chunk was not allocated from this pool")
        del self._in_use[id(chunk)]
        self._free.append(chunk)

    def destroy(self) -> None:
        """Release every arena; the pool can no longer be used."""
        self._free.clear()
        self._in_use.clear()
        self._arenas.clear()
        self._closed = True

    def __enter__(self) -> "MemoryPool":
        return self

    def __exit__(self, *args) -> None:
        self.destroy()