"""
System Logger - console and log file output
"""
from datetime import datetime
from pathlib import Path

from config import settings

# Log directory
LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "system.log"

LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _ensure_log_dir():
    """Create the log directory"""
    LOG_DIR.mkdir(exist_ok=True)


def format_line(message: str, level: str = "INFO", module: str = None) -> str:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    module_str = f"[{module}] " if module else ""
    return f"[{timestamp}] [{level}] {module_str}{message}"


def log(message: str, level: str = "INFO", module: str = None):
    """
    Write a log message to the console and the log file

    Args:
        message: log message
        level: log level (DEBUG, INFO, WARN, ERROR)
        module: module name (e.g. TableRepository, TableService)
    """
    if level not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    log_line = format_line(message, level, module)

    # console
    print(log_line)

    if not settings.LOG_TO_FILE:
        return

    _ensure_log_dir()
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(log_line + "\n")


def debug(message: str, module: str = None):
    log(message, "DEBUG", module)


def info(message: str, module: str = None):
    log(message, "INFO", module)


def warn(message: str, module: str = None):
    log(message, "WARN", module)


def error(message: str, module: str = None):
    log(message, "ERROR", module)

