import argparse
import logging
import sys

from .keycodes import KeyboardAction
from .patterns import MovementPattern
from .settings import MAX_INTERVAL, MIN_INTERVAL, InvalidConfiguration, Settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="inputpulse",
        description="Periodically nudge the mouse (and optionally press a key) to keep the session active.",
    )
    parser.add_argument("--interval", type=float, default=5.0,
                        help=f"Seconds between actions ({MIN_INTERVAL}-{MAX_INTERVAL} in the window).")
    parser.add_argument("--pattern", choices=[p.value for p in MovementPattern],
                        default=MovementPattern.JITTER.value, help="Mouse movement pattern.")
    parser.add_argument("--key", choices=[a.value.lower() for a in KeyboardAction],
                        default=KeyboardAction.NONE.value.lower(), help="Key to press after each move.")
    parser.add_argument("--custom-key", default="", help="Character to press when --key=custom (a-z or space).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every tick.")
    return parser.parse_args(argv)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def build_settings(args):
    keyboard_action = next(a for a in KeyboardAction if a.value.lower() == args.key)
    return Settings(
        interval=args.interval,
        pattern=MovementPattern(args.pattern),
        keyboard_action=keyboard_action,
        custom_key=args.custom_key,
    )


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        settings = build_settings(args)
    except InvalidConfiguration as e:
        raise SystemExit(f"inputpulse: {e}")

    from .app import PulseApp
    from .sinks import default_backend

    sink, gate = default_backend()
    open_settings = None
    if sys.platform == "darwin":
        from .macos import open_accessibility_settings
        open_settings = open_accessibility_settings

    app = PulseApp(settings, sink, gate, open_permission_settings=open_settings)
    app.mainloop()


if __name__ == "__main__":
    main()
