"""A fixed-size bitmap, most significant bit first within each byte."""


class Bitmap:
    """A bitmap over ``size`` bytes, all bits initially clear."""

    def __init__(self, size):
        if size <= 0:
            raise ValueError("bitmap size must be positive")
        self._buffer = bytearray(size)

    def _locate(self, bit):
        byte_index, bit_index = divmod(bit, 8)
        if bit < 0 or byte_index >= len(self._buffer):
            raise IndexError(f"bit {bit} out of range")
        return byte_index, 0x80 >> bit_index

    def is_set(self, bit):
        """Return True if ``bit`` is set."""
        byte_index, mask = self._locate(bit)
        return (self._buffer[byte_index] & mask) == mask

    def set(self, bit):
        """Set ``bit``."""
        byte_index, mask = self._locate(bit)
        self._buffer[byte_index] |= mask

    def clear(self, bit):
        """Clear ``bit``."""
        byte_index, mask = self._locate(bit)
        self._buffer[byte_index] &= ~mask & 0xFF

    def to_bytes(self):
        """Return the underlying bytes."""
        return bytes(self._buffer)

    def __len__(self):
        return len(self._buffer) * 8