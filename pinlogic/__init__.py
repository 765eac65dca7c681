"""Hardware-independent logic for edge detection, buzzer alarms and seven-segment displays."""

__version__ = "0.1.0"
__all__ = ["alarm", "edge", "segment"]