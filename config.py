"""
DeskCalc Configuration Settings
"""
import logging
import os

# Application Settings
APP_NAME = "DeskCalc"
VERSION = "1.0.0"

# Number entry / display limits (Windows Standard calculator style)
MAX_SIG_DIGITS = 16
MAX_DISPLAY_CHARS = 16
ZERO_EPSILON = 1e-15

# Shown instead of a number after a domain error
ERROR_TEXT = "Chyba"

# Grouping separator used when rendering; NBSP is also accepted when parsing
THOUSANDS_SEP = " "
NBSP = "\u00a0"
DECIMAL_SEP = "."

# Display Settings
WINDOW_WIDTH = 340
WINDOW_HEIGHT = 520
DISPLAY_FONT = ("Consolas", 30, "bold")
TOPLINE_FONT = ("Consolas", 13)
BUTTON_FONT = ("Segoe UI", 13)
LABEL_FONT = ("Segoe UI", 11)

# Theme transition
THEME_ANIMATION_MS = 350
THEME_ANIMATION_STEPS = 14

# ── Palettes ───────────────────────────────────────────────────────────────────

LIGHT = {
    "bg":           "#DDE6ED",
    "bg_dark":      "#C8D4DF",
    "shadow_dark":  "#B2BFC8",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",
    "topline_fg":   "#6E8090",
    "btn_bg":       "#E8EEF4",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "memory_fg":    "#2C5F8A",
    "accent":       "#2E8B57",
    "danger":       "#B03A2E",
}

DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",
    "topline_fg":   "#4E6070",
    "btn_bg":       "#283040",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "memory_fg":    "#5E8FC8",
    "accent":       "#4DB888",
    "danger":       "#E55A4E",
}


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return DARK if dark else LIGHT


# User preferences (theme) persisted between runs
SETTINGS_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "settings.json")

# Web Portal settings
WEB_ENABLED = os.environ.get("DESKCALC_WEB", "0") == "1"
WEB_HOST = '127.0.0.1'
WEB_PORT = 8888
MAX_WEB_SESSIONS = 256

# Logging
LOG_LEVEL = os.environ.get("DESKCALC_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level=None):
    """Install a stream handler on the root logger (idempotent)."""
    root = logging.getLogger()
    if root.handlers:
        return root
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level or LOG_LEVEL, logging.INFO))
    return root
