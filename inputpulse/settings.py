import math
import threading
from dataclasses import dataclass, replace

from .keycodes import KeyboardAction
from .patterns import MovementPattern

MIN_INTERVAL = 1
MAX_INTERVAL = 30


class InvalidConfiguration(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    interval: float = 5.0
    pattern: MovementPattern = MovementPattern.JITTER
    keyboard_action: KeyboardAction = KeyboardAction.NONE
    custom_key: str = ""

    def __post_init__(self):
        try:
            interval = float(self.interval)
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Interval must be a number, got {self.interval!r}") from None
        if not math.isfinite(interval) or interval <= 0:
            raise InvalidConfiguration(f"Interval must be a positive number of seconds, got {interval}")
        object.__setattr__(self, "interval", interval)
        if not isinstance(self.pattern, MovementPattern):
            raise InvalidConfiguration(f"Unknown pattern: {self.pattern!r}")
        if not isinstance(self.keyboard_action, KeyboardAction):
            raise InvalidConfiguration(f"Unknown keyboard action: {self.keyboard_action!r}")


class SettingsStore:
    """Holds the current settings snapshot shared between the UI and the timer thread."""

    def __init__(self, settings=None):
        self._lock = threading.Lock()
        self._settings = settings or Settings()

    def snapshot(self):
        with self._lock:
            return self._settings

    def update(self, **changes):
        with self._lock:
            self._settings = replace(self._settings, **changes)
            return self._settings
