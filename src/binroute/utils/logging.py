"""
Logging helpers for binroute.

A thin layer over the standard ``logging`` module that adds four user-facing
verbosity levels, coloured console output and a ``tqdm`` progress tracker for
the CLI pipeline steps.
"""

import logging
import os
import sys
from enum import Enum

from tqdm import tqdm


class LogLevel(Enum):
    """User-facing verbosity levels."""

    QUIET = 0  # errors only
    NORMAL = 1  # progress and results
    VERBOSE = 2  # plus details
    DEBUG = 3  # everything


class Colors:
    """ANSI colour codes."""

    GRAY = "\033[90m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class Symbols:
    """Unicode symbols used as message prefixes."""

    CHECK = "✓"
    CROSS = "✗"
    WARNING = "⚠"
    GEAR = "⚙"
    TRUCK = "🚛"
    BIN = "🗑"
    ROCKET = "🚀"


_LEVEL_COLORS = {
    "DEBUG": Colors.GRAY,
    "INFO": Colors.CYAN,
    "WARNING": Colors.YELLOW,
    "ERROR": Colors.RED,
    "CRITICAL": Colors.RED + Colors.BOLD,
}

# LogLevel -> stdlib level
_STDLIB_LEVELS = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class SimpleFormatter(logging.Formatter):
    """Formatter that wraps each message in the colour of its level."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname, "")
        return f"{color}{record.getMessage()}{Colors.RESET}"


class BinrouteLogger:
    """Process-wide logger registry honouring the current ``LogLevel``."""

    _current_level: LogLevel = LogLevel.NORMAL
    _loggers: dict[str, logging.Logger] = {}

    @classmethod
    def set_level(cls, level: LogLevel) -> None:
        cls._current_level = level
        for logger in cls._loggers.values():
            cls._configure_logger_level(logger, level)

    @classmethod
    def get_level(cls) -> LogLevel:
        return cls._current_level

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return a cached stdlib logger configured for the current level."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._configure_logger_level(logger, cls._current_level)
            cls._loggers[name] = logger
        return cls._loggers[name]

    @staticmethod
    def _configure_logger_level(logger: logging.Logger, level: LogLevel) -> None:
        # A level exported by setup_logging in a parent process takes precedence.
        env_level = os.environ.get("BINROUTE_EFFECTIVE_LOG_LEVEL")
        if env_level:
            try:
                level = LogLevel[env_level.upper()]
            except KeyError:
                pass
        logger.setLevel(_STDLIB_LEVELS.get(level, logging.INFO))

    @classmethod
    def progress(cls, message: str, symbol: str = Symbols.GEAR) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("binroute.progress").info(f"{symbol} {message}")

    @classmethod
    def success(cls, message: str, symbol: str = Symbols.CHECK) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("binroute.success").info(
                f"{Colors.GREEN}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def info(cls, message: str, logger_name: str = "binroute") -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger(logger_name).info(message)

    @classmethod
    def detail(cls, message: str, indent: str = "  ") -> None:
        if cls._current_level.value >= LogLevel.VERBOSE.value:
            cls.get_logger("binroute.detail").info(f"{indent} {message}")

    @classmethod
    def debug(cls, message: str, logger_name: str = "binroute.debug") -> None:
        if cls._current_level.value >= LogLevel.DEBUG.value:
            cls.get_logger(logger_name).debug(message)

    @classmethod
    def warning(cls, message: str, symbol: str = Symbols.WARNING) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("binroute.warning").warning(f"{symbol} {message}")

    @classmethod
    def error(cls, message: str, symbol: str = Symbols.CROSS) -> None:
        cls.get_logger("binroute.error").error(f"{symbol} {message}")


def suppress_third_party_logs() -> None:
    """Keep chatty libraries at WARNING."""
    for name in ("numba", "matplotlib", "urllib3", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure the root handler and the binroute verbosity level.

    When ``level`` is omitted the ``BINROUTE_LOG_LEVEL`` environment variable
    is consulted (quiet, normal, verbose or debug), falling back to NORMAL.
    """
    if level is None:
        env_level = os.environ.get("BINROUTE_LOG_LEVEL", "normal").upper()
        level = LogLevel.__members__.get(env_level, LogLevel.NORMAL)

    # Exported first: set_level re-reads it for every cached logger.
    os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"] = level.name
    BinrouteLogger.set_level(level)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SimpleFormatter())
    handler.setLevel(_STDLIB_LEVELS.get(level, logging.INFO))
    root_logger.addHandler(handler)
    root_logger.setLevel(_STDLIB_LEVELS.get(level, logging.INFO))

    suppress_third_party_logs()


class ProgressTracker:
    """Step-wise progress bar for the CLI pipeline. Silent in QUIET mode."""

    def __init__(self, steps: list[str]):
        self.steps = steps
        self.current = 0
        self.pbar = None
        if BinrouteLogger.get_level() != LogLevel.QUIET:
            self.pbar = tqdm(
                total=len(steps),
                desc=f"{Colors.BOLD}{Symbols.ROCKET} Route optimization{Colors.RESET}",
                bar_format="{desc}: {percentage:3.0f}%|{bar:30}| {n_fmt}/{total_fmt}",
            )

    def advance(self, message: str | None = None, status: str = "success") -> None:
        if self.pbar is None:
            return
        if message:
            color = {
                "success": Colors.GREEN,
                "warning": Colors.YELLOW,
                "error": Colors.RED,
            }.get(status, Colors.CYAN)
            self.pbar.write(f"{color}{Symbols.CHECK} {message}{Colors.RESET}")
        self.current += 1
        self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is None:
            return
        self.pbar.write(f"{Colors.GREEN}{Symbols.CHECK} Optimization completed{Colors.RESET}")
        self.pbar.close()


def log_progress(message: str) -> None:
    BinrouteLogger.progress(message, Symbols.GEAR)


def log_success(message: str) -> None:
    BinrouteLogger.success(message, Symbols.CHECK)


def log_info(message: str, logger_name: str = "binroute") -> None:
    BinrouteLogger.info(message, logger_name)


def log_detail(message: str) -> None:
    BinrouteLogger.detail(message, "  ")


def log_warning(message: str) -> None:
    BinrouteLogger.warning(message, Symbols.WARNING)


def log_error(message: str) -> None:
    BinrouteLogger.error(message, Symbols.CROSS)


def log_debug(message: str, logger_name: str = "binroute.debug") -> None:
    BinrouteLogger.debug(message, logger_name)
