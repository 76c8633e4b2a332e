import datetime
import logging
import random
import threading
from dataclasses import dataclass

from .keycodes import KeyboardAction, resolve
from .patterns import compute_next

log = logging.getLogger(__name__)

NEVER = "Never"


@dataclass(frozen=True)
class Status:
    is_running: bool
    last_action: str


class RepeatingTimer(threading.Thread):
    """Calls ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(self, interval, callback):
        super().__init__(daemon=True)
        self.interval = interval
        self.callback = callback
        self._cancelled = threading.Event()

    def run(self):
        while not self._cancelled.wait(self.interval):
            self.callback()

    def cancel(self):
        self._cancelled.set()


def _time_of_day():
    return datetime.datetime.now().strftime('%H:%M:%S')


class InputScheduler:
    """Runs one input tick immediately on start and then once per interval.

    ``settings`` is a callable returning the current ``Settings`` snapshot. It
    is read on every tick for the pattern and keyboard action, but the
    interval is only read when the timer is armed, so interval changes take
    effect on the next start.
    """

    def __init__(self, settings, sink, gate, on_status=None,
                 timer_factory=RepeatingTimer, clock=_time_of_day, rng=None):
        self._settings = settings
        self._sink = sink
        self._gate = gate
        self._on_status = on_status
        self._timer_factory = timer_factory
        self._clock = clock
        self._rng = rng or random
        self._lock = threading.RLock()
        # serializes snapshot + delivery so status updates arrive in state order
        self._publish_lock = threading.RLock()
        self._timer = None
        self._running = False
        self._phase = 0.0
        self._last_action = NEVER

    @property
    def is_running(self):
        with self._lock:
            return self._running

    @property
    def last_action(self):
        with self._lock:
            return self._last_action

    @property
    def phase(self):
        with self._lock:
            return self._phase

    def status(self):
        with self._lock:
            return Status(self._running, self._last_action)

    def start_if_allowed(self):
        if not self._gate.check_trusted(prompt_if_needed=True):
            log.warning("Input injection is not permitted for this process; not starting.")
            return False
        self.start()
        return True

    def start(self):
        with self._lock:
            if self._running:
                return
            self._running = True
            interval = self._settings().interval
            log.info("Started (every %.0fs).", interval)
            self._perform_tick()
            self._arm(interval)
        self._publish()

    def stop(self):
        with self._lock:
            timer, self._timer = self._timer, None
            was_running, self._running = self._running, False
            if timer is not None:
                timer.cancel()
        if was_running:
            log.info("Stopped.")
            self._publish()

    def tick_once(self):
        with self._lock:
            self._perform_tick()
        self._publish()

    def _arm(self, interval):
        if self._timer is not None:
            self._timer.cancel()
        timer = None

        def fire():
            self._on_timer(timer)

        timer = self._timer_factory(interval, fire)
        self._timer = timer
        timer.start()

    def _on_timer(self, timer):
        with self._lock:
            # a firing that raced with stop() or a re-arm must not tick
            if not self._running or timer is not self._timer:
                return
            self._perform_tick()
        self._publish()

    def _perform_tick(self):
        # runs under self._lock: stop() waits for an in-flight injection, so no
        # event is posted after it returns
        settings = self._settings()
        try:
            self._inject(settings)
        except Exception:
            log.exception("Tick failed; continuing.")
        self._last_action = self._clock()

    def _inject(self, settings):
        current = self._sink.position()
        target, self._phase = compute_next(settings.pattern, current, self._phase, self._rng)
        if not self._sink.move_to(*target):
            log.warning("Mouse move to (%.0f, %.0f) was not delivered.", *target)
        else:
            log.debug("Moved from (%.0f, %.0f) to (%.0f, %.0f).", *current, *target)

        if settings.keyboard_action is KeyboardAction.NONE:
            return
        code = resolve(settings.keyboard_action, settings.custom_key)
        if code is None:
            log.debug("No key for %s %r; skipping keystroke.", settings.keyboard_action.value, settings.custom_key)
            return
        if not self._sink.key_down(code):
            log.warning("Key down for code %s was not delivered.", code)
        if not self._sink.key_up(code):
            log.warning("Key up for code %s was not delivered.", code)

    def _publish(self):
        if self._on_status is None:
            return
        with self._publish_lock:
            status = self.status()
            try:
                self._on_status(status)
            except Exception:
                log.exception("Status callback failed.")
