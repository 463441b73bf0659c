"""
Structured logging for the r0tor driver.

Prefixes:
  ⚡ CRITICAL - Errors, failures
  ⚠️  WARN     - Warnings, unexpected behavior
  ✓  OK       - Success confirmations
  →  MOVE     - Movement commands
  ⬡  SERIAL   - Raw serial I/O (verbose only)
  ⟳  RETRY    - Read retries (verbose only)
  📍 POS      - Position readings
"""

import os
from enum import Enum
from typing import Optional
from datetime import datetime


class LogLevel(Enum):
    CRITICAL = "⚡ CRITICAL"
    WARN = "⚠️  WARN    "
    OK = "✓  OK      "
    MOVE = "→  MOVE    "
    SERIAL = "⬡  SERIAL  "
    RETRY = "⟳  RETRY   "
    POS = "📍 POS     "
    INFO = "ℹ  INFO    "


VERBOSE_LEVELS = {LogLevel.SERIAL, LogLevel.RETRY}

_verbose = os.environ.get("R0TOR_VERBOSE", "").lower() in ("1", "true", "yes")


def set_verbose(enabled: bool) -> None:
    """Show or hide SERIAL/RETRY lines."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def log(level: LogLevel, message: str, data: Optional[dict] = None):
    """Log a message with structured prefix."""
    if level in VERBOSE_LEVELS and not _verbose:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    prefix = level.value

    line = f"[{timestamp}] {prefix} | {message}"
    if data:
        line += f" | {data}"

    print(line)


# Convenience functions
def log_critical(msg: str, data: Optional[dict] = None):
    log(LogLevel.CRITICAL, msg, data)

def log_warn(msg: str, data: Optional[dict] = None):
    log(LogLevel.WARN, msg, data)

def log_ok(msg: str, data: Optional[dict] = None):
    log(LogLevel.OK, msg, data)

def log_move(msg: str, data: Optional[dict] = None):
    log(LogLevel.MOVE, msg, data)

def log_serial(direction: str, data: str):
    """Log serial I/O. direction is '>>>' (send) or '<<<' (recv)"""
    log(LogLevel.SERIAL, f"{direction} {data!r}")

def log_retry(msg: str, data: Optional[dict] = None):
    log(LogLevel.RETRY, msg, data)

def log_pos(msg: str, data: Optional[dict] = None):
    log(LogLevel.POS, msg, data)

def log_info(msg: str, data: Optional[dict] = None):
    log(LogLevel.INFO, msg, data)
