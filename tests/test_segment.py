import pytest

from pinlogic.segment import (
    PATTERN_COMMON_ANODE,
    PATTERN_COMMON_CATHODE,
    CommType,
    Direction,
    DisplayOrder,
    ShiftSegment,
)


class Recorder:
    """Collects frames and PWM values and supplies a settable clock."""

    def __init__(self):
        self.frames = []
        self.pwm = []
        self.now = 0

    def clock(self):
        return self.now


@pytest.fixture
def rec():
    return Recorder()


def lit_bits(data, common_anode=True):
    """Positions (ic*8+bit) of lit segments."""
    result = []
    for ic, byte in enumerate(data):
        for bit in range(8):
            on = not (byte >> bit) & 1 if common_anode else (byte >> bit) & 1
            if on:
                result.append(ic * 8 + bit)
    return result


def test_initial_state(rec):
    seg = ShiftSegment(4, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    assert seg.display_data == bytes([0xFF] * 4)
    assert rec.pwm == [0]
    assert rec.frames == []
    assert seg.common_anode is True


def test_num_ics_clamped_and_validated(rec):
    seg = ShiftSegment(50, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    assert seg.num_ics == 30
    assert seg.display_data == bytes([0xFF] * 30)
    with pytest.raises(ValueError):
        ShiftSegment(0, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)


def test_comm_type_kept(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.CUSTOM)
    assert seg.comm_type is CommType.CUSTOM


def test_display_custom_sends_reversed_frame(rec):
    seg = ShiftSegment(3, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.display_custom(3, 0)
    assert seg.display_data[0] == PATTERN_COMMON_ANODE[3]
    assert rec.frames == [bytes(reversed(seg.display_data))]


def test_display_custom_ignores_bad_arguments(rec):
    seg = ShiftSegment(3, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.display_custom(11, 0)
    seg.display_custom(1, 3)
    assert rec.frames == []
    assert seg.display_data == bytes([0xFF] * 3)


def test_common_cathode_table(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.set_pattern_type(False)
    seg.display_custom(1, 1)
    assert seg.display_data[1] == PATTERN_COMMON_CATHODE[1]
    assert seg.common_anode is False


def test_display_time_hour_first_left(rec):
    seg = ShiftSegment(6, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.display_time(12, 34, 56, 0, DisplayOrder.HOUR_FIRST_LEFT)
    assert seg.display_data == bytes(PATTERN_COMMON_ANODE[d] for d in (1, 2, 3, 4, 5, 6))
    assert len(rec.frames) == 1


@pytest.mark.parametrize(
    "left, right",
    [
        (DisplayOrder.HOUR_FIRST_LEFT, DisplayOrder.SECOND_FIRST_RIGHT),
        (DisplayOrder.SECOND_FIRST_LEFT, DisplayOrder.HOUR_FIRST_RIGHT),
    ],
)
def test_display_time_right_orders_mirror_left(left, right):
    ra, rb = Recorder(), Recorder()
    a = ShiftSegment(6, ra.frames.append, ra.pwm.append, ra.clock, None, CommType.SPI)
    b = ShiftSegment(6, rb.frames.append, rb.pwm.append, rb.clock, None, CommType.SPI)
    a.display_time(7, 8, 9, 0, left)
    b.display_time(7, 8, 9, 0, right)
    assert a.display_data == bytes(reversed(b.display_data))


def test_display_time_offset_and_dot(rec):
    seg = ShiftSegment(8, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.display_time(12, 34, 56, 2, DisplayOrder.HOUR_FIRST_LEFT, 0, True)
    data = seg.display_data
    assert data[2:] == bytes(PATTERN_COMMON_ANODE[d] for d in (1, 2, 3, 4, 5, 6))
    assert data[0] == 0xFF & ~0x01
    assert data[1] == 0xFF


def test_display_time_needs_six_ics(rec):
    seg = ShiftSegment(5, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.display_time(1, 2, 3, 0, DisplayOrder.HOUR_FIRST_LEFT)
    assert rec.frames == []


def test_display_time_rejects_out_of_range(rec):
    seg = ShiftSegment(6, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    with pytest.raises(ValueError):
        seg.display_time(120, 0, 0, 0, DisplayOrder.HOUR_FIRST_LEFT)


def test_set_dot_toggles_bit_without_sending(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.set_dot(1, True)
    assert seg.display_data[1] == 0xFE
    seg.set_dot(1, False)
    assert seg.display_data[1] == 0xFF
    assert rec.frames == []


def test_set_brightness_clamps_and_inverts(rec):
    seg = ShiftSegment(1, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.set_brightness(10, 0)
    seg.set_brightness(10, 5000)
    seg.set_pattern_type(False)
    seg.set_brightness(8, 5000)
    seg.set_brightness(8, 40)
    assert rec.pwm[1:] == [1023, 0, 255, 40]


def test_turn_on(rec):
    seg = ShiftSegment(3, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    seg.turn_on(2)
    assert seg.display_data == bytes([0xFF, 0x00, 0xFF])
    seg.turn_on(0)
    assert seg.display_data == bytes(3)
    seg.turn_on(9)
    assert len(rec.frames) == 3
    assert rec.frames[-1] == bytes(3)


def test_animation_waits_for_interval(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    rec.now = 5
    seg.animate_running(Direction.LEFT_TO_RIGHT, 10)
    assert rec.frames == []


def test_animate_running_left_to_right_cycles(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    positions = []
    for step in range(17):
        rec.now = 10 * (step + 1)
        seg.animate_running(Direction.LEFT_TO_RIGHT, 10)
        positions.append(lit_bits(seg.display_data))
    assert positions == [[p % 16] for p in range(17)]


def test_animate_running_right_to_left(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    positions = []
    for step in range(3):
        rec.now = 10 * (step + 1)
        seg.animate_running(Direction.RIGHT_TO_LEFT, 10)
        positions.append(lit_bits(seg.display_data))
    assert positions == [[0], [15], [14]]


def test_wave_effect_lights_one_segment_in_current_ic(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    for step in range(16):
        rec.now = 10 * (step + 1)
        seg.wave_effect(10)
        lit = lit_bits(seg.display_data)
        assert len(lit) == 1
        assert lit[0] // 8 == step // 8
    assert len(rec.frames) == 16


def test_random_flash_uses_rng(rec):
    calls = []

    def rng(n):
        calls.append(n)
        return 9 if n == 16 else 3

    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, rng, CommType.SPI)
    rec.now = 100
    seg.random_flash(10)
    assert calls == [16, 8]
    assert lit_bits(seg.display_data) == [8 + 3]


def test_bounce_effect_goes_there_and_back(rec):
    seg = ShiftSegment(2, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    positions = []
    for step in range(32):
        rec.now = 10 * (step + 1)
        seg.bounce_effect(10)
        positions.append(lit_bits(seg.display_data)[0])
    assert positions == list(range(16)) + list(range(14, -1, -1)) + [1]


@pytest.mark.parametrize("name", ["sweep_brightness", "pulse_all"])
def test_brightness_animations_light_everything(rec, name):
    seg = ShiftSegment(3, rec.frames.append, rec.pwm.append, rec.clock, None, CommType.SPI)
    rec.now = 50
    getattr(seg, name)(10)
    assert seg.display_data == bytes(3)
    assert rec.frames == [bytes(3)]
    assert len(rec.pwm) == 2