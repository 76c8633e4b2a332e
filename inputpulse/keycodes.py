from enum import Enum

# macOS virtual key codes
SPACE = 49
ENTER = 36

CHAR_CODES = {
    "a": 0, "b": 11, "c": 8, "d": 2, "e": 14, "f": 3, "g": 5,
    "h": 4, "i": 34, "j": 38, "k": 40, "l": 37, "m": 46, "n": 45,
    "o": 31, "p": 35, "q": 12, "r": 15, "s": 1, "t": 17, "u": 32,
    "v": 9, "w": 13, "x": 7, "y": 16, "z": 6,
    " ": SPACE,
}

# For backends that inject by key name rather than virtual code.
KEY_NAMES = {code: ("space" if ch == " " else ch) for ch, code in CHAR_CODES.items()}
KEY_NAMES[ENTER] = "enter"


class KeyboardAction(Enum):
    NONE = "None"
    SPACE = "Space"
    ENTER = "Enter"
    A = "A"
    B = "B"
    CUSTOM = "Custom"


FIXED_CODES = {
    KeyboardAction.SPACE: SPACE,
    KeyboardAction.ENTER: ENTER,
    KeyboardAction.A: CHAR_CODES["a"],
    KeyboardAction.B: CHAR_CODES["b"],
}


def normalize_char(text):
    text = (text or "").lower()
    # a lone space is a valid key, so only strip around something else
    stripped = text.strip()
    return stripped if stripped else text


def resolve(action, custom_char=""):
    """Map a keyboard action to a key code, or None when nothing should be pressed."""
    if action is KeyboardAction.NONE:
        return None
    if action is KeyboardAction.CUSTOM:
        return CHAR_CODES.get(normalize_char(custom_char))
    return FIXED_CODES.get(action)
