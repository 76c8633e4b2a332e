import sys
from typing import Protocol, Tuple


class InjectionSink(Protocol):
    """Delivers synthetic input to the operating system.

    Each call returns True when the event was handed to the OS and False
    when it was refused. Callers treat failures as best effort.
    """

    def position(self) -> Tuple[float, float]: ...

    def move_to(self, x: float, y: float) -> bool: ...

    def key_down(self, code: int) -> bool: ...

    def key_up(self, code: int) -> bool: ...


class PermissionGate(Protocol):
    def check_trusted(self, prompt_if_needed: bool) -> bool: ...


class AlwaysTrustedGate:
    # Windows and X11 let any process synthesize input.
    def check_trusted(self, prompt_if_needed=False):
        return True


def default_backend():
    """Return the ``(sink, gate)`` pair for the running platform."""
    if sys.platform == "darwin":
        from .macos import AccessibilityGate, QuartzSink
        return QuartzSink(), AccessibilityGate()
    from .portable import PyAutoGuiSink
    return PyAutoGuiSink(), AlwaysTrustedGate()
