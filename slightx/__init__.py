"""Small systems-programming building blocks: formatting, alignment, bitmaps, timers, allocators, synchronisation, path handling and undefined-behaviour reports."""

__version__ = "0.1.0"
__all__ = [
    "align",
    "bitmap",
    "conv",
    "format",
    "log",
    "memory",
    "strings",
    "sync",
    "timer",
    "ubsan",
    "vfs",
]