"""Time-of-day alarms and free-running buzzing on a single buzzer output."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

MAX_ALARMS = 10

WriteFn = Callable[[bool], None]
ClockFn = Callable[[], int]
SleepFn = Callable[[int], None]


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


@dataclass(slots=True)
class AlarmPattern:
    """Beep pattern of an alarm; all durations are milliseconds."""

    beep_count: int = 0
    beep_duration: int = 0
    off_duration: int = 0
    long_pause: int = 0
    total_duration: int = 0


@dataclass(slots=True)
class Alarm:
    """One alarm slot and its running state."""

    hour: int = 0
    minute: int = 0
    second: int = 0
    pattern: AlarmPattern = field(default_factory=AlarmPattern)
    active: bool = False
    enabled: bool = False
    start_time: int = 0
    step: int = 0
    prev_millis: int = 0


class AlarmBuzzer:
    """Drives a buzzer output from up to ``MAX_ALARMS`` alarms.

    ``write`` receives the level to put on the output pin, ``clock`` returns
    the current time in milliseconds and ``sleep`` blocks for a number of
    milliseconds. On creation the buzzer sounds once for one second.
    """

    def __init__(
        self,
        write: WriteFn,
        clock: ClockFn | None = None,
        active_high: bool = True,
        sleep: SleepFn | None = None,
    ) -> None:
        self._write = write
        self._clock = clock or _monotonic_ms
        self.active_high = active_high
        self._alarms = [Alarm() for _ in range(MAX_ALARMS)]
        self._alarm_count = 0
        self._buzzing = False
        self._buzz_state = False
        self._buzz_start = 0
        self._buzz_prev = 0

        self._write(active_high)
        (sleep or _sleep_ms)(1000)
        self._write(not active_high)

    @property
    def alarms(self) -> tuple[Alarm, ...]:
        """All alarm slots."""
        return tuple(self._alarms)

    @property
    def alarm_count(self) -> int:
        """One past the highest slot that has been configured."""
        return self._alarm_count

    @property
    def buzzing(self) -> bool:
        """Whether free-running buzzing is in progress."""
        return self._buzzing

    def _off(self) -> None:
        self._write(not self.active_high)

    def _drive(self, state: bool) -> None:
        self._write(state if self.active_high else not state)

    def set_alarm(
        self,
        index: int,
        hour: int,
        minute: int,
        second: int,
        count: int,
        beep_ms: int,
        off_ms: int,
        long_pause: int,
        duration: int,
        enable: bool = True,
    ) -> None:
        """Configure alarm slot ``index``; an index out of range is ignored."""
        if not 0 <= index < MAX_ALARMS:
            return
        alarm = self._alarms[index]
        alarm.enabled = enable
        if not enable:
            was_active = alarm.active
            alarm.active = False
            alarm.step = 0
            alarm.prev_millis = 0
            if was_active:
                self._off()

        alarm.hour = hour
        alarm.minute = minute
        alarm.second = second
        pattern = alarm.pattern
        pattern.beep_count = count
        if self.active_high:
            pattern.beep_duration, pattern.off_duration = beep_ms, off_ms
        else:
            pattern.beep_duration, pattern.off_duration = off_ms, beep_ms
        pattern.long_pause = long_pause
        pattern.total_duration = duration
        self._alarm_count = max(self._alarm_count, index + 1)

    def check_alarm(self, hour: int, minute: int, second: int) -> None:
        """Start alarms due at the given time and advance running ones."""
        for alarm in self._alarms[: self._alarm_count]:
            if not alarm.enabled:
                continue
            if not alarm.active and (
                hour < alarm.hour or (hour == alarm.hour and minute < alarm.minute)
            ):
                continue

            now = self._clock()
            if (
                not alarm.active
                and (hour, minute, second) == (alarm.hour, alarm.minute, alarm.second)
            ):
                alarm.active = True
                alarm.start_time = now
                alarm.step = 0
                alarm.prev_millis = now

            if not alarm.active:
                continue

            pattern = alarm.pattern
            beep_steps = pattern.beep_count * 2
            total_steps = beep_steps + 1 if pattern.long_pause > 0 else beep_steps
            in_beeps = alarm.step < beep_steps
            if in_beeps:
                even = alarm.step % 2 == 0
                timing = pattern.beep_duration if even else pattern.off_duration
            else:
                timing = abs(pattern.long_pause - pattern.off_duration)

            elapsed = now - alarm.start_time
            if elapsed < pattern.total_duration or alarm.step > 0:
                if now - alarm.prev_millis >= timing:
                    self._drive(in_beeps and alarm.step % 2 == 0)
                    alarm.prev_millis = now
                    alarm.step += 1
                    if alarm.step >= total_steps:
                        alarm.step = 0
            else:
                alarm.active = False
                alarm.step = 0
                self._off()

    def buzz(self, time_on: int, time_off: int, duration: int = 0) -> None:
        """Toggle the buzzer on and off; call repeatedly.

        With a positive ``duration`` buzzing stops on its own once that many
        milliseconds have passed since it began.
        """
        now = self._clock()
        if not self._buzzing:
            self._buzzing = True
            self._buzz_start = now
            self._buzz_prev = now
            self._buzz_state = False
            self._off()

        if duration > 0 and now - self._buzz_start >= duration:
            self._buzzing = False
            self._off()
            return

        if now - self._buzz_prev >= (time_on if self._buzz_state else time_off):
            self._buzz_state = not self._buzz_state
            self._drive(self._buzz_state)
            self._buzz_prev = now

    def stop_buzzing(self) -> None:
        """Stop buzzing and switch the buzzer off."""
        if self._buzzing:
            self._buzz_state = False
            self._drive(False)
            self._buzzing = False