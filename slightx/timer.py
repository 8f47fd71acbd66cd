"""A pausable stopwatch driven by a nanosecond clock."""


class Timer:
    """Measures elapsed nanoseconds from ``clock``, excluding paused time."""

    def __init__(self, clock):
        if clock is None:
            raise ValueError("clock is required")
        self._clock = clock
        self._started_at = 0
        self._paused_at = 0
        self._started = False
        self._paused = False

    def start(self):
        """Start (or restart) the timer."""
        self._started_at = self._clock()
        self._paused_at = 0
        self._started = True
        self._paused = False

    def stop(self):
        """Stop and reset the timer."""
        self._started_at = 0
        self._paused_at = 0
        self._started = False
        self._paused = False

    def pause(self):
        """Pause a running timer."""
        if not self._started:
            raise RuntimeError("timer not started")
        if self._paused:
            raise RuntimeError("timer already paused")
        self._paused_at = self._clock()
        self._paused = True

    def resume(self):
        """Resume a paused timer, discounting the paused interval."""
        if not self._started:
            raise RuntimeError("timer not started")
        if not self._paused:
            raise RuntimeError("timer not paused")
        self._started_at += self._clock() - self._paused_at
        self._paused_at = 0
        self._paused = False

    def is_started(self):
        return self._started

    def is_paused(self):
        return self._paused

    def elapsed_ns(self):
        """Return the nanoseconds counted so far."""
        if not self._started:
            raise RuntimeError("timer not started")
        if self._paused:
            return self._paused_at - self._started_at
        return self._clock() - self._started_at