"""
Rotor errors - typed failures surfaced to the caller.

Nothing here is retried except ReadTimeout, which only the transaction
engine's read loop consumes.
"""


class RotorError(Exception):
    """Base class for all rotor driver errors"""
    pass


class RotorIOError(RotorError, OSError):
    """Transport write/flush failed - fatal for the current call"""
    pass


class RotorTimeoutError(RotorError, TimeoutError):
    """No reply after the whole read retry budget was spent"""
    pass


class InvalidReplyError(RotorError, ValueError):
    """Reply received but rejected, or too short to parse"""
    pass


class InvalidArgumentError(RotorError, ValueError):
    """Caller passed something the protocol has no mapping for"""
    pass


class ReadTimeout(RotorError):
    """A single terminated read hit its deadline with nothing received"""
    pass
