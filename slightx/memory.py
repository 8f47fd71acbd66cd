"""Memory blocks and allocators: a heap, a bump arena and a scratch tracker."""

from .align import align_up, is_alignment_valid

MAX_ALIGN = 16


class Block:
    """A region of ``size`` bytes at ``offset`` within some backing memory."""

    __slots__ = ("_memory", "offset", "size")

    def __init__(self, memory, offset, size):
        self._memory = memory
        self.offset = offset
        self.size = size

    @property
    def data(self):
        """A writable view of the block's bytes."""
        if self._memory is None:
            raise ValueError("block has been released")
        return memoryview(self._memory)[self.offset:self.offset + self.size]

    @property
    def released(self):
        return self._memory is None

    def _release(self):
        self._memory = None

    def __len__(self):
        return self.size

    def __bytes__(self):
        return bytes(self.data)

    def __repr__(self):
        state = "released" if self.released else f"offset={self.offset}"
        return f"Block({state}, size={self.size})"


def _check_size(size):
    if size <= 0:
        raise ValueError("allocation size must be positive")


def _copy_into(dest, src):
    if src is not None:
        count = min(src.size, dest.size)
        dest.data[:count] = src.data[:count]
    return dest


class HeapAllocator:
    """Allocates each block in its own zero-filled memory."""

    def allocate(self, size):
        """Return a new zeroed block of ``size`` bytes."""
        _check_size(size)
        return Block(bytearray(size), 0, size)

    def reallocate(self, block, new_size):
        """Return a block of ``new_size`` bytes holding ``block``'s contents.

        Bytes beyond the old size are zero. A ``new_size`` of zero releases
        ``block`` and returns None.
        """
        if new_size <= 0:
            self.deallocate(block)
            return None
        new_block = _copy_into(self.allocate(new_size), block)
        if block is not None:
            block._release()
        return new_block

    def deallocate(self, block):
        """Release ``block``; None is ignored."""
        if block is not None:
            block._release()


class Arena:
    """A bump allocator over a fixed buffer of ``size`` bytes."""

    def __init__(self, size):
        _check_size(size)
        self._memory = bytearray(size)
        self._offset = 0

    @property
    def capacity(self):
        return len(self._memory)

    @property
    def used(self):
        return self._offset

    def reset(self):
        """Forget every allocation; the whole buffer becomes free again."""
        self._offset = 0

    def _take(self, start, size, advance):
        end = start + size
        self._memory[start:end] = bytes(size)
        self._offset += advance
        return Block(self._memory, start, size)

    def allocate(self, size):
        """Return a zeroed block; space is consumed in multiples of MAX_ALIGN."""
        _check_size(size)
        rounded = align_up(size, MAX_ALIGN)
        if self.capacity - self._offset < rounded:
            raise MemoryError(
                f"arena exhausted: {rounded} bytes requested, "
                f"{self.capacity - self._offset} free"
            )
        return self._take(self._offset, size, rounded)

    def allocate_aligned(self, size, alignment):
        """Return a zeroed block whose offset is a multiple of ``alignment``."""
        _check_size(size)
        if alignment <= 0 or not is_alignment_valid(alignment):
            raise ValueError(f"invalid alignment {alignment}")
        start = align_up(self._offset, alignment)
        padding = start - self._offset
        if self.capacity - self._offset < size + padding:
            raise MemoryError(
                f"arena exhausted: {size + padding} bytes requested, "
                f"{self.capacity - self._offset} free"
            )
        return self._take(start, size, padding + size)

    def reallocate(self, block, new_size):
        """Return a new block holding ``block``'s contents, or None for size 0."""
        if new_size <= 0:
            return None
        return _copy_into(self.allocate(new_size), block)

    def deallocate(self, block):
        """Arena memory is only reclaimed by :meth:`reset`."""


class Scratch:
    """Tracks blocks obtained from ``allocator`` so they can be freed at once."""

    def __init__(self, allocator):
        self._allocator = allocator
        self._blocks = []

    def _index(self, block):
        index = next((i for i, b in enumerate(self._blocks) if b is block), None)
        if index is None:
            raise ValueError("block does not belong to this scratch allocator")
        return index

    def allocate(self, size):
        """Allocate from the underlying allocator and remember the block."""
        block = self._allocator.allocate(size)
        self._blocks.insert(0, block)
        return block

    def reallocate(self, block, new_size):
        """Resize a tracked block, keeping its place among the others."""
        index = self._index(block)
        _check_size(new_size)
        new_block = self._allocator.reallocate(block, new_size)
        self._blocks[index] = new_block
        return new_block

    def deallocate(self, block):
        """Free a tracked block and stop tracking it."""
        index = self._index(block)
        del self._blocks[index]
        self._allocator.deallocate(block)

    def close(self):
        """Free every tracked block, most recent first."""
        blocks, self._blocks = self._blocks, []
        for block in blocks:
            self._allocator.deallocate(block)

    def __len__(self):
        return len(self._blocks)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False