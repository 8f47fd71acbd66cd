# slightx

Small, dependency-free building blocks of the kind a kernel or runtime library
provides, written as plain Python: integer-to-text conversion, a `%`-style
formatter, alignment arithmetic, a bitmap, a pausable timer, simple
allocators, wait-queue based synchronisation, path normalisation and
undefined-behaviour reports.

## Installation

```
pip install slightx
```

To run the test suite:

```
pip install "slightx[test]"
pytest
```

## What is inside

| Module            | Provides |
|-------------------|----------|
| `slightx.conv`    | `itoa(value, base)`: an unsigned 64-bit integer as lower-case digits in bases 2 to 36; any other base gives `""` |
| `slightx.format`  | `format_chunks` (a generator of text pieces) and `format_string`: a `%`-style formatter for `%d %u %b %x %X %p %s %c %%` |
| `slightx.align`   | `is_alignment_valid`, `is_aligned`, `align_up`, `align_down` |
| `slightx.bitmap`  | `Bitmap(size)`: `size` bytes of bits, most significant bit first in each byte, with `is_set`, `set`, `clear`, `to_bytes` |
| `slightx.timer`   | `Timer(clock)`: a stopwatch over any callable returning nanoseconds, with `start`, `stop`, `pause`, `resume`, `elapsed_ns` |
| `slightx.log`     | `Logger(write)`: `puts`, `print` (formatted, no line ending) and `log` (formatted line ending in `\r\n`, written under a lock) |
| `slightx.strings` | `text_from_buffer`, `slice_text`, `rfind_char`, `split` |
| `slightx.vfs`     | `normalize_path`, `PathTooLongError`, and the enums `VfsError`, `NodeType`, `Mode`, `SeekWhence`, `MessageKind` with the `Perms` and `Stat` records |
| `slightx.memory`  | `HeapAllocator`, `Arena`, `Scratch` and the `Block` they hand out |
| `slightx.sync`    | `SpinLock`, `SyncPoint`, `WaitItem`, `WaitQueue`, `Mutex`, `Semaphore`, `ConditionVariable` |
| `slightx.ubsan`   | `Reporter`, `SourceLocation`, `TypeDescriptor`, `UndefinedBehaviorAbort` |

## Examples

Formatting:

```python
from slightx.format import format_string

format_string("%s has %d items at %p", "queue", -3, 0x1000)
# 'queue has -3 items at *0x1000'
```

Unknown directives are passed through as written, and a `%` at the very end
of the format produces a single `%`.

Path normalisation:

```python
from slightx.vfs import normalize_path

normalize_path("//usr/./lib/../bin/")
# '/usr/bin'
```

Only absolute paths are accepted; `..` never climbs above `/`, and a result
that would not fit in `PATH_MAX` (4096) characters raises `PathTooLongError`.

A bump arena:

```python
from slightx.memory import Arena

arena = Arena(256)
block = arena.allocate(10)   # a 10-byte block; 16 bytes of the arena are used
arena.used                   # 16
arena.reset()                # everything is free again
```

`Arena.allocate` consumes space in multiples of 16 bytes and raises
`MemoryError` when the arena is full. `Arena.deallocate` does nothing; space is
only reclaimed by `reset`.

A scratch allocator that frees everything it handed out when it closes:

```python
from slightx.memory import HeapAllocator, Scratch

with Scratch(HeapAllocator()) as scratch:
    a = scratch.allocate(32)
    b = scratch.allocate(64)
    len(scratch)   # 2
```

Waiting primitives hand back a status rather than blocking, and wake waiters
through callbacks:

```python
from slightx.sync import Mutex, MutexStatus, WaitItem

mutex = Mutex()
woken = []
mutex.lock("first", WaitItem(lambda: woken.append("first")))       # MutexStatus.ACQUIRED
mutex.lock("second", WaitItem(lambda: woken.append("second")))     # MutexStatus.SHOULD_WAIT
mutex.unlock("first")   # woken == ["second"]
```

Undefined-behaviour reports:

```python
from slightx.ubsan import Reporter, SourceLocation

lines = []
reporter = Reporter(lines.append)
reporter.builtin_unreachable(SourceLocation("main.c", 10, 5))
# writes the framed report, then raises UndefinedBehaviorAbort
```

Every `Reporter` handler writes a report framed by a banner and a footer; it
raises `UndefinedBehaviorAbort` afterwards when called with `abort=True`, when
the reporter was created with `always_abort=True`, or, for
`builtin_unreachable`, always.

## What this package does not do

- It has no command-line program.
- The allocators manage Python `bytearray` buffers; they do not hand out raw
  machine memory or addresses.
- `Mutex`, `Semaphore` and `ConditionVariable` never put a thread to sleep:
  they queue a `WaitItem` and return a status, and the caller decides how to
  wait until its `wake` callback runs. Only `SpinLock` and `SyncPoint.wait`
  block the calling thread.
- `slightx.vfs` defines file-system types, message kinds and path
  normalisation only; there is no file system, server or client behind them.
- `slightx.ubsan` renders reports from the values it is given; it does not
  detect undefined behaviour itself.