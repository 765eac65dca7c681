"""Seven-segment displays driven through a chain of shift registers."""

from __future__ import annotations

import random
import time
from enum import Enum, IntEnum
from typing import Callable, Sequence

MAX_ICS = 30

PATTERN_COMMON_ANODE = bytes((0x80, 0xF2, 0x48, 0x60, 0x32, 0x24, 0x04, 0xF0, 0x00, 0x20, 0x00))
PATTERN_COMMON_CATHODE = bytes((0x7F, 0x0D, 0xB7, 0x9F, 0xCD, 0xDB, 0xFB, 0x0F, 0xFF, 0xDF, 0xFF))

_DOT = 0x01

SendFn = Callable[[bytes], None]
PwmFn = Callable[[int], None]
ClockFn = Callable[[], int]
RandomFn = Callable[[int], int]


class CommType(IntEnum):
    """How bytes reach the shift registers."""

    SPI = 0
    CUSTOM = 1


class Direction(IntEnum):
    """Travel direction of the running-bit animation."""

    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1


class DisplayOrder(Enum):
    """Digit layout used when showing a time of day."""

    SECOND_FIRST_LEFT = "second_first_left"
    HOUR_FIRST_LEFT = "hour_first_left"
    SECOND_FIRST_RIGHT = "second_first_right"
    HOUR_FIRST_RIGHT = "hour_first_right"


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _ignore_pwm(value: int) -> None:
    return None


class ShiftSegment:
    """A chain of ``num_ics`` shift registers, one digit per register.

    ``send`` receives a whole frame each time the chain is latched: the bytes
    in shift order, so the byte for the last register comes first. ``pwm``
    receives brightness output values, ``clock`` returns milliseconds and
    ``rng(n)`` returns an integer in ``range(n)``.
    """

    def __init__(
        self,
        num_ics: int,
        send: SendFn,
        pwm: PwmFn | None = None,
        clock: ClockFn | None = None,
        rng: RandomFn | None = None,
        comm_type: CommType = CommType.SPI,
    ) -> None:
        if num_ics < 1:
            raise ValueError("num_ics must be at least 1")
        self.num_ics = min(num_ics, MAX_ICS)
        self.comm_type = CommType(comm_type)
        self._send = send
        self._pwm = pwm or _ignore_pwm
        self._clock = clock or _monotonic_ms
        self._rng = rng or random.randrange
        self._common_anode = True
        self._pattern = PATTERN_COMMON_ANODE
        self._data = bytearray([self._blank] * self.num_ics)

        self._running_pos = 0
        self._running_last = 0
        self._wave_pos = 0
        self._wave_seg = 0
        self._wave_last = 0
        self._flash_last = 0
        self._sweep_last = 0
        self._sweep_level = 0
        self._sweep_up = True
        self._pulse_last = 0
        self._pulse_level = 0
        self._pulse_up = True
        self._bounce_pos = 0
        self._bounce_step = 1
        self._bounce_last = 0

        self._pwm(0)

    @property
    def common_anode(self) -> bool:
        """Whether segments light when their bit is low."""
        return self._common_anode

    @property
    def display_data(self) -> bytes:
        """Current register contents, first register first."""
        return bytes(self._data)

    @property
    def _blank(self) -> int:
        return 0xFF if self._common_anode else 0x00

    @property
    def _lit(self) -> int:
        return 0x00 if self._common_anode else 0xFF

    def _single_bit(self, bit: int) -> int:
        mask = 1 << bit
        return 0xFF & ~mask if self._common_anode else mask

    def _clear(self) -> None:
        self._data[:] = bytes([self._blank] * self.num_ics)

    def _shift(self) -> None:
        self._send(bytes(reversed(self._data)))

    def set_pattern_type(self, common_anode: bool) -> None:
        """Select the digit table for common-anode or common-cathode digits."""
        self._common_anode = bool(common_anode)
        self._pattern = PATTERN_COMMON_ANODE if common_anode else PATTERN_COMMON_CATHODE

    def display_time(
        self,
        hour: int,
        minute: int,
        second: int,
        start_display: int,
        order: DisplayOrder,
        dot_index: int | None = None,
        dot_state: bool = False,
    ) -> None:
        """Show a time on six digits starting at register ``start_display``.

        Nothing happens on a chain of fewer than six registers. Digits that
        fall past the end of the chain are dropped.
        """
        if self.num_ics < 6:
            return
        for value in (hour, minute, second):
            if not 0 <= value <= 109:
                raise ValueError(f"time field out of range: {value}")
        if start_display < 0:
            raise ValueError("start_display must not be negative")

        fields: Sequence[int]
        if order in (DisplayOrder.SECOND_FIRST_LEFT, DisplayOrder.SECOND_FIRST_RIGHT):
            fields = (second, minute, hour)
        else:
            fields = (hour, minute, second)
        digits = [d for value in fields for d in divmod(value, 10)]
        if order in (DisplayOrder.SECOND_FIRST_RIGHT, DisplayOrder.HOUR_FIRST_RIGHT):
            digits = [d for value in fields for d in reversed(divmod(value, 10))]

        for offset, digit in enumerate(digits):
            position = start_display + offset
            if position < self.num_ics:
                self._data[position] = self._pattern[digit]

        if dot_index is not None:
            self.set_dot(dot_index, dot_state)
        self._shift()

    def display_custom(self, number: int, index: int) -> None:
        """Show digit ``number`` (10 is the extra table entry) on register ``index``."""
        if 0 <= index < self.num_ics and 0 <= number <= 10:
            self._data[index] = self._pattern[number]
            self._shift()

    def set_dot(self, index: int, state: bool) -> None:
        """Light or clear the dot of register ``index``; not sent until the next frame."""
        if not 0 <= index < self.num_ics:
            return
        lit = bool(state) != self._common_anode
        if lit:
            self._data[index] |= _DOT
        else:
            self._data[index] &= 0xFF & ~_DOT

    def set_brightness(self, bit_depth: int, value: int) -> None:
        """Set brightness on an 8-bit or, with ``bit_depth`` 10, a 10-bit scale."""
        maximum = 1023 if bit_depth == 10 else 255
        value = max(0, min(value, maximum))
        self._pwm(maximum - value if self._common_anode else value)

    def turn_on(self, index: int) -> None:
        """Light every segment of register ``index`` (1-based); 0 lights all."""
        if index == 0:
            self._data[:] = bytes([self._lit] * self.num_ics)
        elif 0 < index <= self.num_ics:
            self._data[index - 1] = self._lit
        self._shift()

    def _due(self, last: int, speed_ms: int) -> int | None:
        now = self._clock()
        return now if now - last >= speed_ms else None

    def animate_running(self, direction: Direction, speed_ms: int) -> None:
        """Move a single lit segment along the whole chain; call repeatedly."""
        now = self._due(self._running_last, speed_ms)
        if now is None:
            return
        total = self.num_ics * 8
        self._clear()
        ic, bit = divmod(self._running_pos, 8)
        if ic < self.num_ics:
            self._data[ic] = self._single_bit(bit)
        self._shift()
        if direction == Direction.LEFT_TO_RIGHT:
            self._running_pos = (self._running_pos + 1) % total
        else:
            self._running_pos = total - 1 if self._running_pos == 0 else self._running_pos - 1
        self._running_last = self._clock()

    def wave_effect(self, speed_ms: int) -> None:
        """Sweep a lit segment through the chain with a rotating offset."""
        now = self._due(self._wave_last, speed_ms)
        if now is None:
            return
        self._clear()
        bit = (self._wave_pos + self._wave_seg) % 8
        self._data[self._wave_pos // 8] = self._single_bit(bit)
        self._shift()
        self._wave_pos = (self._wave_pos + 1) % (self.num_ics * 8)
        self._wave_seg = (self._wave_seg + 1) % 8
        self._wave_last = self._clock()

    def random_flash(self, speed_ms: int) -> None:
        """Light one randomly chosen segment somewhere in the chain."""
        now = self._due(self._flash_last, speed_ms)
        if now is None:
            return
        self._clear()
        position = self._rng(self.num_ics * 8)
        segment = self._rng(8)
        self._data[position // 8] = self._single_bit(segment)
        self._shift()
        self._flash_last = self._clock()

    def _step_level(self, level: int, up: bool, step: int) -> tuple[int, bool]:
        if up:
            level = (level + step) % 256
            if level >= 255:
                up = False
        else:
            level = (level - step) % 256
            if level <= 0:
                up = True
        return level, up

    def sweep_brightness(self, speed_ms: int) -> None:
        """Light everything and step the brightness slowly."""
        now = self._due(self._sweep_last, speed_ms)
        if now is None:
            return
        self._data[:] = bytes([self._lit] * self.num_ics)
        self._sweep_level, self._sweep_up = self._step_level(self._sweep_level, self._sweep_up, 2)
        self.set_brightness(self._sweep_level, 512)
        self._shift()
        self._sweep_last = self._clock()

    def pulse_all(self, speed_ms: int) -> None:
        """Light everything and step the brightness in large jumps."""
        now = self._due(self._pulse_last, speed_ms)
        if now is None:
            return
        self._data[:] = bytes([self._lit] * self.num_ics)
        self._pulse_level, self._pulse_up = self._step_level(self._pulse_level, self._pulse_up, 20)
        self.set_brightness(self._pulse_level, 512)
        self._shift()
        self._pulse_last = self._clock()

    def bounce_effect(self, speed_ms: int) -> None:
        """Move a lit segment to the end of the chain and back again."""
        now = self._due(self._bounce_last, speed_ms)
        if now is None:
            return
        self._clear()
        ic, bit = divmod(self._bounce_pos, 8)
        self._data[ic] = self._single_bit(bit)
        self._shift()
        self._bounce_pos = (self._bounce_pos + self._bounce_step) % 65536
        if self._bounce_pos >= self.num_ics * 8 - 1 or self._bounce_pos == 0:
            self._bounce_step = -self._bounce_step
        self._bounce_last = self._clock()