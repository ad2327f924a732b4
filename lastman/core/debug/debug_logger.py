"""
debug_logger.py
---------------
Category-filtered console logger for the tutorial and its collaborators.

Lines look like:
    [12:04:31] [TutorialSequencer][STATE] Tutorial Step 2: AIMING

Verbosity is set globally (LoggerConfig.LOG_LEVEL) and per category
(LoggerConfig.CATEGORIES). Unknown categories are silent.
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Which categories print, and how much."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE

    CATEGORIES = {
        # Core
        "loading": False,
        "system": True,
        "input": True,
        "timing": False,
        "event_manager": False,

        # Tutorial
        "tutorial": True,
        "gates": True,
        "game_timer": True,

        # User
        "ui": True,
    }

    SHOW_TIMESTAMP = True
    SHOW_SOURCE = True


class Colors:
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


LEVELS = {"NONE": 0, "ERROR": 1, "WARN": 2, "INFO": 3, "VERBOSE": 4}

# tag -> (color, minimum level that prints it)
TAG_STYLES = {
    "INIT": (Colors.WHITE, "INFO"),
    "SYSTEM": (Colors.MAGENTA, "INFO"),
    "STATE": (Colors.CYAN, "INFO"),
    "ACTION": (Colors.GREEN, "INFO"),
    "TRACE": (Colors.BLUE, "VERBOSE"),
    "WARN": (Colors.YELLOW, "WARN"),
    "FAIL": (Colors.RED, "ERROR"),
}

STATUS_COLORS = {"OK": Colors.GREEN, "LOADING": Colors.CYAN, "FAIL": Colors.RED}


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger; every method takes a message and a category."""

    LINE_LENGTH = 59

    @staticmethod
    def enabled(category: str, tag: str = "STATE") -> bool:
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        if not LoggerConfig.CATEGORIES.get(category, False):
            return False
        _, level = TAG_STYLES[tag]
        return LEVELS[level] <= LEVELS.get(LoggerConfig.LOG_LEVEL, LEVELS["INFO"])

    @staticmethod
    def _source(depth: int = 3) -> str:
        """Class name of the object that called the public log method."""
        try:
            frame_locals = sys._getframe(depth).f_locals
        except ValueError:
            return "Unknown"
        owner = frame_locals.get("self")
        if owner is not None:
            return type(owner).__name__
        owner = frame_locals.get("cls")
        if isinstance(owner, type):
            return owner.__name__
        return sys._getframe(depth).f_code.co_name

    @staticmethod
    def _emit(tag: str, msg: str, category: str):
        if not DebugLogger.enabled(category, tag):
            return
        color, _ = TAG_STYLES[tag]
        parts = []
        if LoggerConfig.SHOW_TIMESTAMP:
            parts.append(f"[{datetime.now():%H:%M:%S}] ")
        if LoggerConfig.SHOW_SOURCE:
            parts.append(f"[{DebugLogger._source()}]")
        parts.append(f"[{tag}] ")
        print(f"{color}{''.join(parts)}{msg}{Colors.RESET}")

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def init(msg: str, category: str = "system"):
        DebugLogger._emit("INIT", msg, category)

    @staticmethod
    def system(msg: str, category: str = "system"):
        DebugLogger._emit("SYSTEM", msg, category)

    @staticmethod
    def state(msg: str, category: str = "system"):
        """State change: step entered, tutorial finished, timer paused."""
        DebugLogger._emit("STATE", msg, category)

    @staticmethod
    def action(msg: str, category: str = "system"):
        """Something the player or the tutorial did."""
        DebugLogger._emit("ACTION", msg, category)

    @staticmethod
    def trace(msg: str, category: str = "timing"):
        """Verbose; timer churn and per-frame input."""
        DebugLogger._emit("TRACE", msg, category)

    @staticmethod
    def warn(msg: str, category: str = "system"):
        DebugLogger._emit("WARN", msg, category)

    @staticmethod
    def fail(msg: str, category: str = "system"):
        DebugLogger._emit("FAIL", msg, category)

    # ===========================================================
    # Startup Report
    # ===========================================================

    @staticmethod
    def init_entry(module: str, status: str = "OK"):
        """Dotted startup line: `> TutorialSequencer ........ [OK]`."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        tail = f" [{status}]"
        head = f"> {module} ".ljust(30)
        dots = "." * max(DebugLogger.LINE_LENGTH - len(head) - len(tail), 1)
        color = STATUS_COLORS.get(status.upper(), Colors.WHITE)
        print(f"{Colors.WHITE}{head}{dots}{color}{tail}{Colors.RESET}")

    @staticmethod
    def init_sub(detail: str, level: int = 1):
        if not LoggerConfig.ENABLE_LOGGING:
            return
        print(f"{' ' * (level * 4)}• {Colors.WHITE}{detail}{Colors.RESET}")
