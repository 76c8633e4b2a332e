import datetime
import logging
import queue
import sys
import tkinter as tk
from tkinter import ttk, messagebox

from .keycodes import KeyboardAction
from .patterns import MovementPattern
from .scheduler import InputScheduler
from .settings import MAX_INTERVAL, MIN_INTERVAL, InvalidConfiguration, SettingsStore

log = logging.getLogger(__name__)

PUMP_MS = 100


class QueueLogHandler(logging.Handler):
    """Hands log lines to the Tk thread; the log pane is drained in ``_pump``."""

    def __init__(self, lines):
        super().__init__(level=logging.INFO)
        self.lines = lines

    def emit(self, record):
        now = datetime.datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        self.lines.put(f"[{now}] {record.getMessage()}")


class PulseApp(tk.Tk):
    def __init__(self, settings, sink, gate, open_permission_settings=None):
        super().__init__()
        self.title("InputPulse")
        self.geometry("620x560")
        self.minsize(520, 480)
        self.option_add("*Font", "Arial 12")
        self.open_permission_settings = open_permission_settings

        self.store = SettingsStore(settings)
        self.status_updates = queue.Queue()
        self.log_lines = queue.Queue()
        self.log_handler = QueueLogHandler(self.log_lines)
        logging.getLogger("inputpulse").addHandler(self.log_handler)
        self.scheduler = InputScheduler(self.store.snapshot, sink, gate, on_status=self.status_updates.put)

        self.interval_s = tk.IntVar(value=int(round(min(max(settings.interval, MIN_INTERVAL), MAX_INTERVAL))))
        self.pattern = tk.StringVar(value=settings.pattern.value)
        self.keyboard_action = tk.StringVar(value=settings.keyboard_action.value)
        self.custom_key = tk.StringVar(value=settings.custom_key)
        self.last_action = tk.StringVar(value="Last Action: Never")
        self._build_ui()
        self._push_settings()
        self.after(PUMP_MS, self._pump)

    def _build_ui(self):
        main = ttk.Frame(self, padding=12)
        main.pack(fill="both", expand=True)

        controls = ttk.LabelFrame(main, text="Settings", padding=10)
        controls.pack(side="top", fill="x")

        self._add_scale_with_spin(
            controls, "Interval (seconds)", self.interval_s,
            frm=MIN_INTERVAL, to=MAX_INTERVAL, step=1, row=0
        )

        ttk.Label(controls, text="Pattern").grid(row=1, column=0, sticky="w", padx=6, pady=6)
        pattern_frame = ttk.Frame(controls)
        pattern_frame.grid(row=1, column=1, columnspan=2, sticky="w", padx=6, pady=6)
        for p in MovementPattern:
            ttk.Radiobutton(pattern_frame, text=p.display_name, value=p.value,
                            variable=self.pattern).pack(side="left", padx=(0, 12))

        ttk.Label(controls, text="Key press").grid(row=2, column=0, sticky="w", padx=6, pady=6)
        key_frame = ttk.Frame(controls)
        key_frame.grid(row=2, column=1, columnspan=2, sticky="w", padx=6, pady=6)
        action_box = ttk.Combobox(key_frame, textvariable=self.keyboard_action, state="readonly",
                                  values=[a.value for a in KeyboardAction], width=10)
        action_box.pack(side="left")
        self.custom_entry = ttk.Entry(key_frame, textvariable=self.custom_key, width=6, justify="center")
        self.custom_hint = ttk.Label(key_frame, text="a-z or space")

        self.status_label = ttk.Label(main, textvariable=self.last_action, anchor="center")
        self.status_label.pack(fill="x", pady=(8, 4))

        btns = ttk.Frame(main)
        btns.pack(fill="x", pady=(4, 4))
        self.start_btn = ttk.Button(btns, text="Start", command=self.start)
        self.stop_btn = ttk.Button(btns, text="Stop", command=self.stop, state="disabled")
        self.move_now_btn = ttk.Button(btns, text="Move Now", command=self.move_once)
        self.start_btn.pack(side="left", padx=4)
        self.stop_btn.pack(side="left", padx=4)
        self.move_now_btn.pack(side="left", padx=4)

        log_frame = ttk.LabelFrame(main, text="Log", padding=8)
        log_frame.pack(fill="both", expand=True)
        self.log = tk.Text(log_frame, height=12, wrap="none", font=("Arial", 11))
        self.log.pack(fill="both", expand=True)
        self._log("Press Start to begin.")

        for var in (self.interval_s, self.pattern, self.keyboard_action, self.custom_key):
            var.trace_add("write", self._push_settings)
        self.keyboard_action.trace_add("write", self._toggle_custom_entry)
        self._toggle_custom_entry()

        mod = "Command" if sys.platform == "darwin" else "Control"
        self.bind(f"<{mod}-s>", lambda e: self.start())
        self.bind(f"<{mod}-t>", lambda e: self.stop())
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _add_scale_with_spin(self, parent, label, var, frm, to, step, row):
        lbl = ttk.Label(parent, text=label)
        lbl.grid(row=row, column=0, sticky="w", padx=6, pady=6)

        scl = tk.Scale(
            parent, from_=frm, to=to, orient="horizontal",
            showvalue=False, resolution=step, length=320,
            sliderlength=28, width=16, troughcolor="#e7f2ff",
            activebackground="#1976d2", highlightthickness=0,
            command=lambda v: var.set(int(float(v)))
        )
        scl.set(var.get())
        scl.grid(row=row, column=1, sticky="ew", padx=6, pady=6)
        parent.grid_columnconfigure(1, weight=1)

        def sync_var_to_scale(*_):
            try:
                scl.set(var.get())
            except tk.TclError:
                pass

        var.trace_add("write", sync_var_to_scale)

        spin = ttk.Spinbox(parent, from_=frm, to=to, increment=step,
                           textvariable=var, width=6, justify="center")
        spin.grid(row=row, column=2, sticky="e", padx=6)

        spin.bind("<Return>", lambda e, v=var, mn=frm, mx=to: self._normalize_entry(v, mn, mx))
        spin.bind("<FocusOut>", lambda e, v=var, mn=frm, mx=to: self._normalize_entry(v, mn, mx))

    def _normalize_entry(self, var, mn, mx):
        try:
            val = float(var.get())
        except (tk.TclError, ValueError):
            val = mn
        var.set(int(round(min(max(val, mn), mx))))

    def _toggle_custom_entry(self, *_):
        if self.keyboard_action.get() == KeyboardAction.CUSTOM.value:
            self.custom_entry.pack(side="left", padx=(8, 4))
            self.custom_hint.pack(side="left")
        else:
            self.custom_entry.pack_forget()
            self.custom_hint.pack_forget()

    def _push_settings(self, *_):
        try:
            interval = self.interval_s.get()
        except tk.TclError:
            # half-typed spinbox value; _normalize_entry fixes it on focus out
            return
        if not MIN_INTERVAL <= interval <= MAX_INTERVAL:
            return
        try:
            self.store.update(
                interval=interval,
                pattern=MovementPattern(self.pattern.get()),
                keyboard_action=KeyboardAction(self.keyboard_action.get()),
                custom_key=self.custom_key.get(),
            )
        except InvalidConfiguration as e:
            self._log(f"Ignored settings change: {e}")

    def _log(self, msg):
        self.log.insert("end", msg + "\n")
        self.log.see("end")

    def _pump(self):
        while True:
            try:
                self._log(self.log_lines.get_nowait())
            except queue.Empty:
                break
        status = None
        while True:
            try:
                status = self.status_updates.get_nowait()
            except queue.Empty:
                break
        if status is not None:
            self._show_status(status)
        self.after(PUMP_MS, self._pump)

    def _show_status(self, status):
        self.last_action.set(f"Last Action: {status.last_action}")
        if status.is_running:
            self._set_buttons_running()
        else:
            self._set_buttons_idle()

    def start(self):
        if self.scheduler.start_if_allowed():
            return
        self._log("Accessibility permission is required to move the mouse.")
        if self.open_permission_settings is None:
            return
        if messagebox.askyesno(
            "Accessibility Permission",
            "InputPulse needs Accessibility access to move the mouse and press keys.\n\n"
            "Open System Settings now?"
        ):
            self.open_permission_settings()

    def stop(self):
        self.scheduler.stop()

    def move_once(self):
        self.scheduler.tick_once()

    def _set_buttons_running(self):
        self.start_btn.config(state="disabled")
        self.stop_btn.config(state="normal")

    def _set_buttons_idle(self):
        self.start_btn.config(state="normal")
        self.stop_btn.config(state="disabled")

    def _on_close(self):
        self.scheduler.stop()
        logging.getLogger("inputpulse").removeHandler(self.log_handler)
        self.destroy()
