# pinlogic

This package holds the logic that drives simple output hardware, separate from
the hardware itself. Every component takes callables for three jobs: writing
an output level, reading a millisecond clock, and sending register bytes. The
same objects therefore work on a board, in a simulator or in tests.

## Components

### `pinlogic.edge.EdgeDetector`

`EdgeDetector(max_pins)` remembers the last level of each pin in
`range(max_pins)`. It has three query methods:

- `rising(pin, signal)`
- `falling(pin, signal)`
- `changed(pin, signal)`

Each method stores the new level and reports whether that kind of edge
occurred. Pins out of range always report `False` and are not stored.

```python
from pinlogic.edge import EdgeDetector

edges = EdgeDetector(4)
edges.rising(0, True)    # True: the line went from low to high
edges.rising(0, True)    # False: still high
edges.falling(0, False)  # True: the line went from high to low
```

### `pinlogic.alarm.AlarmBuzzer`

`AlarmBuzzer(write, clock=None, active_high=True, sleep=None)` drives one
buzzer output.

- `write(level)` receives the pin level.
- `clock()` returns milliseconds. It defaults to a monotonic clock.
- `sleep(ms)` blocks. It defaults to `time.sleep`.

When the object is created, the buzzer sounds once for one second, using
`sleep`.

There are `MAX_ALARMS` (10) alarm slots.

- `set_alarm(index, hour, minute, second, count, beep_ms, off_ms, long_pause, duration, enable=True)`
  configures a slot. An index out of range is ignored. Disabling a running
  alarm stops it and switches the buzzer off. With `active_high=False`, the
  beep and off durations are stored swapped.
- `check_alarm(hour, minute, second)` is called from the main loop with the
  current time of day. An alarm starts when the time matches exactly. It then
  steps through its pattern:
  - `count` beeps of `beep_ms` each, with `off_ms` between them;
  - then, if `long_pause` is positive, a pause;
  - the pattern repeats until `duration` milliseconds have passed.
- `buzz(time_on, time_off, duration=0)` toggles the output on and off each
  time it is called. With a positive `duration`, it stops by itself once that
  much time has passed. `stop_buzzing()` ends buzzing.
- The properties `alarms`, `alarm_count` and `buzzing` expose the current
  state.

```python
import time
from pinlogic.alarm import AlarmBuzzer

buzzer = AlarmBuzzer(
    write=lambda level: print("buzzer", level),
    clock=lambda: int(time.monotonic() * 1000),
)
buzzer.set_alarm(0, 7, 30, 0, count=3, beep_ms=100, off_ms=100,
                 long_pause=800, duration=60_000)

# Call this from the main loop with the current time of day.
buzzer.check_alarm(7, 30, 0)
```

### `pinlogic.segment.ShiftSegment`

`ShiftSegment(num_ics, send, pwm=None, clock=None, rng=None, comm_type=CommType.SPI)`
keeps the byte image of a chain of shift registers. The chain is capped at
`MAX_ICS` (30) registers, and each register drives one seven-segment digit.

- `send(frame)` receives the bytes each time the chain is latched. The byte
  for the last register comes first.
- `pwm(value)` receives brightness values.

Methods:

- `set_pattern_type(common_anode)` selects the common-anode or
  common-cathode digit table. Common anode is the default.
- `display_time(hour, minute, second, start_display, order, dot_index=None, dot_state=False)`
  writes six digits, laid out by a `DisplayOrder` member. It does nothing on
  chains shorter than six registers. It raises `ValueError` for a field
  outside 0–109 or a negative start.
- `display_custom(number, index)` shows digit 0–10 on one register.
- `set_dot(index, state)` sets the decimal point. The change is sent with the
  next frame.
- `set_brightness(bit_depth, value)` clamps `value` to an 8-bit scale, or to
  a 10-bit scale when `bit_depth` is 10. For common-anode digits the value
  is inverted.
- `turn_on(index)` lights all segments of register `index`, counted from 1.
  With 0 it lights every register.
- Non-blocking animations advance one step when at least `speed_ms` has
  passed since their last step:
  - `animate_running(direction, speed_ms)`
  - `wave_effect(speed_ms)`
  - `random_flash(speed_ms)`
  - `sweep_brightness(speed_ms)`
  - `pulse_all(speed_ms)`
  - `bounce_effect(speed_ms)`
- The properties `display_data` and `common_anode` expose the current state.

```python
from pinlogic.segment import ShiftSegment, DisplayOrder

display = ShiftSegment(6, send=lambda data: print(data.hex()), pwm=print)
display.display_time(12, 34, 56, 0, DisplayOrder.HOUR_FIRST_LEFT)
```

## What the package does not do

The package does not access pins, SPI buses or PWM outputs. All input and
output goes through the callables you pass in. The `comm_type` of a
`ShiftSegment` is only recorded; it does not change how frames are
delivered. There is no command-line program.

## Installation

```
pip install .
```

Install with the test extra to run the tests:

```
pip install ".[test]"
pytest
```