"""Per-pin edge detection on boolean signals."""

from __future__ import annotations


class EdgeDetector:
    """Tracks the previous level of a fixed number of pins and reports edges.

    Pins outside ``0 <= pin < max_pins`` are ignored: every query on them
    reports no edge and stores nothing.
    """

    def __init__(self, max_pins: int) -> None:
        if max_pins < 0:
            raise ValueError("max_pins must not be negative")
        self._previous = [False] * max_pins

    @property
    def max_pins(self) -> int:
        """Number of pins tracked."""
        return len(self._previous)

    def _update(self, pin: int, signal: bool) -> bool | None:
        """Store ``signal`` for ``pin`` and return the previous level."""
        if not 0 <= pin < len(self._previous):
            return None
        previous = self._previous[pin]
        self._previous[pin] = bool(signal)
        return previous

    def rising(self, pin: int, signal: bool) -> bool:
        """Return True when ``signal`` went from low to high on ``pin``."""
        previous = self._update(pin, signal)
        return previous is not None and bool(signal) and not previous

    def falling(self, pin: int, signal: bool) -> bool:
        """Return True when ``signal`` went from high to low on ``pin``."""
        previous = self._update(pin, signal)
        return previous is not None and not signal and previous

    def changed(self, pin: int, signal: bool) -> bool:
        """Return True when ``signal`` differs from the last level on ``pin``."""
        previous = self._update(pin, signal)
        return previous is not None and bool(signal) != previous