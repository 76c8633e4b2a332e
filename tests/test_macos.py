import sys
import unittest
from unittest import mock


@unittest.skipUnless(sys.platform == "darwin", "Quartz backend is macOS only")
class QuartzSinkTests(unittest.TestCase):
    def setUp(self):
        from inputpulse import macos
        patcher = mock.patch.object(macos, "Quartz")
        self.quartz = patcher.start()
        self.addCleanup(patcher.stop)
        self.sink = macos.QuartzSink()

    def test_move_posts_plain_mouse_moved_event(self):
        self.assertTrue(self.sink.move_to(10.0, 20.0))
        self.quartz.CGEventCreateMouseEvent.assert_called_once_with(
            None, self.quartz.kCGEventMouseMoved, (10.0, 20.0), self.quartz.kCGMouseButtonLeft
        )
        self.quartz.CGEventSetIntegerValueField.assert_not_called()
        self.quartz.CGEventPost.assert_called_once_with(
            self.quartz.kCGHIDEventTap, self.quartz.CGEventCreateMouseEvent.return_value
        )

    def test_move_warps_when_event_cannot_be_created(self):
        self.quartz.CGEventCreateMouseEvent.return_value = None
        self.quartz.CGWarpMouseCursorPosition.return_value = self.quartz.kCGErrorSuccess
        self.assertTrue(self.sink.move_to(1.0, 2.0))
        self.quartz.CGWarpMouseCursorPosition.assert_called_once_with((1.0, 2.0))
        self.quartz.CGEventPost.assert_not_called()

    def test_key_down_and_up_use_virtual_code(self):
        self.assertTrue(self.sink.key_down(49))
        self.assertTrue(self.sink.key_up(49))
        self.assertEqual(self.quartz.CGEventCreateKeyboardEvent.call_args_list,
                         [mock.call(None, 49, True), mock.call(None, 49, False)])


if __name__ == "__main__":
    unittest.main()
