"""Alignment helpers for sizes and addresses."""


def is_alignment_valid(alignment):
    """Return True if ``alignment`` is a power of two (or zero)."""
    return (alignment & (alignment - 1)) == 0


def is_aligned(value, alignment):
    """Return True if ``value`` is a multiple of ``alignment``."""
    return value % alignment == 0


def align_up(value, alignment):
    """Round ``value`` up to the next multiple of ``alignment``."""
    rem = value % alignment
    return value if rem == 0 else value + (alignment - rem)


def align_down(value, alignment):
    """Round ``value`` down to a multiple of ``alignment``."""
    return value - value % alignment