from .keycodes import KeyboardAction, resolve
from .patterns import MovementPattern, compute_next
from .scheduler import InputScheduler, RepeatingTimer, Status
from .settings import InvalidConfiguration, Settings, SettingsStore

__version__ = "0.1.0"
