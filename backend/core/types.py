"""
Core types for the r0tor driver.

Commands are frozen dataclasses so a command string is fully determined by
its fields. RotorState is the only mutable type and belongs to exactly one
RotorController for the life of a session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from .errors import InvalidArgumentError, InvalidReplyError


# Shortest position reply, terminator excluded
MIN_POSITION_REPLY_LEN = 8

SET_POSITION_REPLY_LEN = 2
GET_POSITION_REPLY_LEN = 15

# Both axes accepted
SET_POSITION_ACK = "11"


# =============================================================================
# Position Types
# =============================================================================


@dataclass(frozen=True)
class AzEl:
    """Immutable azimuth/elevation pair in degrees."""
    azimuth: float
    elevation: float

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"azimuth": self.azimuth, "elevation": self.elevation}

    @classmethod
    def from_dict(cls, d: dict) -> AzEl:
        """Deserialize from dictionary."""
        return cls(azimuth=d["azimuth"], elevation=d["elevation"])


@dataclass
class RotorState:
    """
    Per-session rotor state.

    current_* only changes after a read-back (stop), target_* changes as
    soon as a set-position command is issued.
    """
    current_azimuth: float = 0.0
    current_elevation: float = 0.0
    target_azimuth: float = 0.0
    target_elevation: float = 0.0
    last_update: Optional[datetime] = None

    @property
    def current(self) -> AzEl:
        return AzEl(self.current_azimuth, self.current_elevation)

    @property
    def target(self) -> AzEl:
        return AzEl(self.target_azimuth, self.target_elevation)

    def set_target(self, azimuth: float, elevation: float) -> None:
        self.target_azimuth = azimuth
        self.target_elevation = elevation

    def sync_to(self, pos: AzEl) -> None:
        """Make both current and target the read-back position."""
        self.current_azimuth = self.target_azimuth = pos.azimuth
        self.current_elevation = self.target_elevation = pos.elevation
        self.last_update = datetime.now()

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "target": self.target.to_dict(),
            "last_update": self.last_update.isoformat() if self.last_update else None,
        }


# =============================================================================
# Command Protocol & Types
# =============================================================================


class Command(Protocol):
    """Protocol for all r0tor commands."""

    expects_reply: bool
    reply_length: int

    def to_wire(self) -> str:
        """Convert to the ASCII command string."""
        ...


def format_angle(value: float) -> str:
    """Two decimals, at least three integer digits: 5 -> '005.00'."""
    return f"{value:06.2f}"


@dataclass(frozen=True)
class SetPositionCommand:
    """
    Set target azimuth and elevation (setaz/setel).

    The controller answers one '1' per accepted axis, so a full accept
    reads back as "11".
    """
    azimuth: float
    elevation: float
    expects_reply: bool = True
    reply_length: int = SET_POSITION_REPLY_LEN

    def to_wire(self) -> str:
        return f"setaz{format_angle(self.azimuth)};setel{format_angle(self.elevation)};"


@dataclass(frozen=True)
class GetPositionCommand:
    """Query current position (getpos)."""
    expects_reply: bool = True
    reply_length: int = GET_POSITION_REPLY_LEN

    def to_wire(self) -> str:
        return "getpos;"


@dataclass(frozen=True)
class StopCommand:
    """Stop all movement and brake. Sent fire-and-forget."""
    expects_reply: bool = False
    reply_length: int = 0

    def to_wire(self) -> str:
        return "stop;"


# =============================================================================
# Reply Parsing
# =============================================================================


def is_set_position_ack(reply: str) -> bool:
    """True if both axes were accepted."""
    return len(reply) > 0 and SET_POSITION_ACK in reply


def parse_position_reply(reply: str) -> AzEl:
    """
    Parse "DDD.dd;DDD.dd;" into an AzEl.

    Raises:
        InvalidReplyError: reply too short or fields not numeric
    """
    if len(reply) < MIN_POSITION_REPLY_LEN:
        raise InvalidReplyError(f"Position reply too short: {reply!r}")

    fields = reply.split(";")
    if len(fields) < 2:
        raise InvalidReplyError(f"Position reply missing separator: {reply!r}")

    try:
        return AzEl(azimuth=float(fields[0]), elevation=float(fields[1]))
    except ValueError as e:
        raise InvalidReplyError(f"Position reply not numeric: {reply!r}") from e


# =============================================================================
# Direction / Reset
# =============================================================================


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    CW = "cw"
    CCW = "ccw"

    @classmethod
    def parse(cls, value) -> Direction:
        """Accept a Direction or its name/value, e.g. 'up', 'CW', 'clockwise'."""
        if isinstance(value, cls):
            return value
        aliases = {
            "clockwise": cls.CW,
            "counter-clockwise": cls.CCW,
            "counterclockwise": cls.CCW,
        }
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgumentError(f"Unknown direction: {value!r}") from None


class ResetMode(Enum):
    """The r0tor has a single reset behaviour; the mode is accepted and ignored."""
    ALL = "all"
