import threading
import unittest

from inputpulse.__main__ import build_settings, parse_args
from inputpulse.keycodes import KeyboardAction
from inputpulse.patterns import MovementPattern
from inputpulse.settings import InvalidConfiguration, Settings, SettingsStore


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        s = Settings()
        self.assertEqual(s.interval, 5.0)
        self.assertIs(s.pattern, MovementPattern.JITTER)
        self.assertIs(s.keyboard_action, KeyboardAction.NONE)
        self.assertEqual(s.custom_key, "")

    def test_rejects_non_positive_interval(self):
        for bad in (0, -1, -0.5, "soon", float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(InvalidConfiguration):
                Settings(interval=bad)

    def test_invalid_configuration_is_a_value_error(self):
        self.assertTrue(issubclass(InvalidConfiguration, ValueError))

    def test_core_does_not_clamp(self):
        self.assertEqual(Settings(interval=120).interval, 120.0)
        self.assertEqual(Settings(interval=0.25).interval, 0.25)

    def test_rejects_unknown_pattern(self):
        with self.assertRaises(InvalidConfiguration):
            Settings(pattern="spiral")


class SettingsStoreTests(unittest.TestCase):
    def test_update_swaps_snapshot(self):
        store = SettingsStore()
        before = store.snapshot()
        store.update(pattern=MovementPattern.CIRCLE, interval=2)
        self.assertIs(before.pattern, MovementPattern.JITTER)
        self.assertIs(store.snapshot().pattern, MovementPattern.CIRCLE)
        self.assertEqual(store.snapshot().interval, 2.0)

    def test_invalid_update_keeps_previous_settings(self):
        store = SettingsStore(Settings(interval=3))
        with self.assertRaises(InvalidConfiguration):
            store.update(interval=0)
        self.assertEqual(store.snapshot().interval, 3.0)

    def test_concurrent_updates_leave_a_valid_snapshot(self):
        store = SettingsStore()

        def writer(n):
            for i in range(200):
                store.update(interval=1 + (i + n) % 30)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertTrue(1 <= store.snapshot().interval <= 30)


class LauncherArgsTests(unittest.TestCase):
    def test_defaults(self):
        s = build_settings(parse_args([]))
        self.assertEqual(s, Settings())

    def test_options_map_to_settings(self):
        s = build_settings(parse_args(["--interval", "3", "--pattern", "circle",
                                       "--key", "custom", "--custom-key", "x"]))
        self.assertEqual(s.interval, 3.0)
        self.assertIs(s.pattern, MovementPattern.CIRCLE)
        self.assertIs(s.keyboard_action, KeyboardAction.CUSTOM)
        self.assertEqual(s.custom_key, "x")

    def test_non_positive_interval_is_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            build_settings(parse_args(["--interval", "0"]))

    def test_non_finite_interval_is_rejected(self):
        for value in ("nan", "inf"):
            with self.assertRaises(InvalidConfiguration):
                build_settings(parse_args(["--interval", value]))


if __name__ == "__main__":
    unittest.main()
