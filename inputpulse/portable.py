import logging

import pyautogui

from .keycodes import KEY_NAMES

log = logging.getLogger(__name__)


class PyAutoGuiSink:
    """Injection sink on top of pyautogui, for Windows and X11 desktops."""

    def __init__(self, failsafe=True):
        pyautogui.FAILSAFE = failsafe

    def position(self):
        x, y = pyautogui.position()
        return float(x), float(y)

    def move_to(self, x, y):
        try:
            pyautogui.moveTo(round(x), round(y), _pause=False)
        except pyautogui.FailSafeException:
            log.warning("PyAutoGUI failsafe triggered (mouse hit a corner); move skipped.")
            return False
        except pyautogui.PyAutoGUIException as e:
            log.warning("Mouse move to (%.0f, %.0f) failed: %s", x, y, e)
            return False
        return True

    def key_down(self, code):
        return self._key(pyautogui.keyDown, code)

    def key_up(self, code):
        return self._key(pyautogui.keyUp, code)

    def _key(self, press, code):
        name = KEY_NAMES.get(code)
        if name is None:
            log.warning("No key name for code %s", code)
            return False
        try:
            press(name, _pause=False)
        except pyautogui.PyAutoGUIException as e:
            log.warning("Key event for %r failed: %s", name, e)
            return False
        return True
