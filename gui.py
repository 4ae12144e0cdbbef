"""
GUI for DeskCalc
Tkinter window: turns buttons and keys into tokens and renders the calculator state
"""
import json
import logging
import tkinter as tk

import config
from calculator import Calculator
from tokens import Key, key_from_event

logger = logging.getLogger(__name__)

# Button grid, top to bottom; each cell is (label, token, kind)
BUTTON_ROWS = [
    [("MC", Key.MEMORY_CLEAR, "mode"), ("MR", Key.MEMORY_RECALL, "mode"),
     ("M+", Key.MEMORY_ADD, "mode"), ("M−", Key.MEMORY_SUBTRACT, "mode")],
    [("%", Key.PERCENT, "operator"), ("CE", Key.CLEAR_ENTRY, "operator"),
     ("C", Key.CLEAR, "danger"), ("⌫", Key.BACKSPACE, "operator")],
    [("1/x", Key.RECIPROCAL, "operator"), ("x²", Key.SQUARE, "operator"),
     ("√x", Key.SQRT, "operator"), ("÷", Key.DIVIDE, "operator")],
    [("7", Key.SEVEN, "normal"), ("8", Key.EIGHT, "normal"),
     ("9", Key.NINE, "normal"), ("×", Key.MULTIPLY, "operator")],
    [("4", Key.FOUR, "normal"), ("5", Key.FIVE, "normal"),
     ("6", Key.SIX, "normal"), ("−", Key.SUBTRACT, "operator")],
    [("1", Key.ONE, "normal"), ("2", Key.TWO, "normal"),
     ("3", Key.THREE, "normal"), ("+", Key.ADD, "operator")],
    [("+/−", Key.NEGATE, "normal"), ("0", Key.ZERO, "normal"),
     (".", Key.DECIMAL, "normal"), ("xʸ", Key.POWER, "operator")],
    [("=", Key.EQUALS, "equals")],
]


def _hex_to_rgb(h):
    h = h.lstrip("#")
    return tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))


def _rgb_to_hex(r, g, b):
    return f"#{r:02x}{g:02x}{b:02x}"


def mix_colors(c1, c2, t):
    """Linear blend of two #rrggbb colours, t in [0, 1]"""
    a, b = _hex_to_rgb(c1), _hex_to_rgb(c2)
    return _rgb_to_hex(*(round(x + (y - x) * t) for x, y in zip(a, b)))


class DeskCalcGUI:
    def __init__(self, root):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")
        self.root.minsize(config.WINDOW_WIDTH, config.WINDOW_HEIGHT)

        self.calculator = Calculator()

        # ── Theme state (load before any widget is created) ───────────────
        settings = self._load_settings()
        self.dark_mode: bool = settings.get("dark_mode", False)
        self.T: dict = config.get_theme(self.dark_mode)
        self._animation = None
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)
        self.render()

    # ── Settings persistence ─────────────────────────────────────────────
    def _load_settings(self):
        try:
            with open(config.SETTINGS_FILE, "r") as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}

    def _save_settings(self, data):
        existing = self._load_settings()
        existing.update(data)
        try:
            with open(config.SETTINGS_FILE, "w") as f:
                json.dump(existing, f, indent=2)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", config.SETTINGS_FILE, e)

    # ── Widgets ──────────────────────────────────────────────────────────
    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a flat styled button for the active palette."""
        T = self.T
        if kind == "equals":
            bg, fg, abg = T["equals_bg"], T["equals_fg"], T["accent"]
        elif kind == "operator":
            bg, fg, abg = T["btn_bg"], T["operator_fg"], T["bg_dark"]
        elif kind == "mode":
            bg, fg, abg = T["bg_dark"], T["memory_fg"], T["shadow_dark"]
        elif kind == "danger":
            bg, fg, abg = T["danger"], "#FFFFFF", T["bg_dark"]
        else:
            bg, fg, abg = T["btn_bg"], T["btn_fg"], T["bg_dark"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=abg, activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            **kw
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T

        # Top bar: memory flag on the left, theme toggle on the right
        self.top_frame = tk.Frame(self.root, bg=T["bg"])
        self.top_frame.pack(fill=tk.X, padx=6, pady=(6, 0))

        self.memory_flag = tk.Label(self.top_frame, text="", width=2,
                                    font=(config.LABEL_FONT[0], config.LABEL_FONT[1], "bold"),
                                    bg=T["bg"], fg=T["memory_fg"])
        self.memory_flag.pack(side=tk.LEFT)

        self.theme_var = tk.BooleanVar(value=self.dark_mode)
        self.theme_toggle = tk.Checkbutton(
            self.top_frame, text="Dark", variable=self.theme_var,
            command=lambda: self._toggle_dark_mode(self.theme_var.get()),
            font=config.LABEL_FONT, bg=T["bg"], fg=T["btn_fg"],
            selectcolor=T["bg_dark"], activebackground=T["bg"],
            relief=tk.FLAT, bd=0, highlightthickness=0
        )
        self.theme_toggle.pack(side=tk.RIGHT)

        # Display: top line above the main number
        self.display_frame = tk.Frame(self.root, bg=T["display_bg"])
        self.display_frame.pack(fill=tk.X, padx=6, pady=6)

        self.top_line = tk.Label(self.display_frame, text="", font=config.TOPLINE_FONT,
                                 bg=T["display_bg"], fg=T["topline_fg"], anchor=tk.E, padx=10)
        self.top_line.pack(side=tk.TOP, fill=tk.X, pady=(6, 0))

        self.display = tk.Label(self.display_frame, text="0", font=config.DISPLAY_FONT,
                                bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=10)
        self.display.pack(side=tk.TOP, fill=tk.X, pady=(0, 6))

        # Keypad
        self.keypad = tk.Frame(self.root, bg=T["bg"])
        self.keypad.pack(fill=tk.BOTH, expand=True, padx=6, pady=(0, 6))
        for col in range(4):
            self.keypad.grid_columnconfigure(col, weight=1, uniform="keys")
        for r, row in enumerate(BUTTON_ROWS):
            self.keypad.grid_rowconfigure(r, weight=1)
            span = 4 // len(row)
            for c, (label, key, kind) in enumerate(row):
                btn = self._neu_btn(self.keypad, label, kind=kind,
                                    command=lambda key=key: self.on_token(key))
                btn.grid(row=r, column=c * span, columnspan=span, sticky="nsew", padx=2, pady=2)

    # ── Input ────────────────────────────────────────────────────────────
    def on_token(self, key):
        """Feed one token to the calculator and refresh the window"""
        self.calculator.process_token(key)
        self.render()

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = key_from_event(event.keysym, event.char)
        if key is None:
            return None
        self.on_token(key)
        return "break"

    # ── Output ───────────────────────────────────────────────────────────
    def render(self):
        """Sync UI with calculator state"""
        self.display.config(text=self.calculator.get_display())
        self.top_line.config(text=self.calculator.get_top_line())
        self.memory_flag.config(text="M" if self.calculator.has_memory() else "")

    # ── Theme ────────────────────────────────────────────────────────────
    def _toggle_dark_mode(self, val: bool):
        """Persist dark_mode setting and apply theme with a fade."""
        self.dark_mode = val
        self._save_settings({"dark_mode": val})
        self.apply_theme()

    def apply_theme(self):
        """Rebuild widgets for the new palette and fade the window background in."""
        old_bg = self.T["bg"]
        self.T = config.get_theme(self.dark_mode)
        for w in self.root.winfo_children():
            w.destroy()
        self.create_widgets()
        self.render()
        self._animate_background(old_bg, self.T["bg"])

    def _animate_background(self, start, end):
        if self._animation is not None:
            self.root.after_cancel(self._animation)
        steps = config.THEME_ANIMATION_STEPS
        delay = max(1, config.THEME_ANIMATION_MS // steps)

        def _step(i=1):
            t = i / steps
            # ease in-out (cubic)
            eased = 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2
            colour = mix_colors(start, end, eased)
            self.root.configure(bg=colour)
            for frame in (self.top_frame, self.keypad):
                frame.configure(bg=colour)
            self.memory_flag.configure(bg=colour)
            self.theme_toggle.configure(bg=colour, activebackground=colour)
            if i < steps:
                self._animation = self.root.after(delay, _step, i + 1)
            else:
                self._animation = None

        _step()
