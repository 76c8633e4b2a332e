"""Native macOS backend: Quartz event injection and the Accessibility check."""

import logging
import subprocess

import Quartz
from ApplicationServices import AXIsProcessTrustedWithOptions, kAXTrustedCheckOptionPrompt

log = logging.getLogger(__name__)

ACCESSIBILITY_PANE = "x-apple.systempreferences:com.apple.preference.security?Privacy_Accessibility"


class QuartzSink:
    """Posts mouse-move and key events to the HID event tap.

    Coordinates are global display coordinates with the origin at the top
    left of the main display, which is what both ``CGEventGetLocation`` and
    ``CGEventCreateMouseEvent`` use.
    """

    def position(self):
        event = Quartz.CGEventCreate(None)
        location = Quartz.CGEventGetLocation(event)
        return location.x, location.y

    def move_to(self, x, y):
        event = Quartz.CGEventCreateMouseEvent(
            None, Quartz.kCGEventMouseMoved, (x, y), Quartz.kCGMouseButtonLeft
        )
        if event is None:
            log.debug("Could not create mouse event; warping cursor instead.")
            return Quartz.CGWarpMouseCursorPosition((x, y)) == Quartz.kCGErrorSuccess
        Quartz.CGEventPost(Quartz.kCGHIDEventTap, event)
        return True

    def key_down(self, code):
        return self._post_key(code, True)

    def key_up(self, code):
        return self._post_key(code, False)

    def _post_key(self, code, down):
        event = Quartz.CGEventCreateKeyboardEvent(None, code, down)
        if event is None:
            log.warning("Could not create key event for code %s", code)
            return False
        Quartz.CGEventPost(Quartz.kCGHIDEventTap, event)
        return True


class AccessibilityGate:
    def check_trusted(self, prompt_if_needed=False):
        return bool(AXIsProcessTrustedWithOptions({kAXTrustedCheckOptionPrompt: prompt_if_needed}))


def open_accessibility_settings():
    subprocess.run(["open", ACCESSIBILITY_PANE], check=False)
