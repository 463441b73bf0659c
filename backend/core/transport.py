"""
Transport layer - byte-level link to the r0tor controller.

Provides:
- Transport protocol (interface)
- MockTransport for testing
- (SerialTransport in separate file for production)
"""

from __future__ import annotations

import re
import time
from collections import deque
from typing import Deque, List, Protocol, Union

from .errors import ReadTimeout, RotorIOError
from .types import AzEl


class Transport(Protocol):
    """Protocol for r0tor communication."""

    def write(self, data: bytes) -> None:
        """Write raw bytes. Raises RotorIOError on failure."""
        ...

    def read_string(self, max_len: int, terminator: bytes = b"\n") -> bytes:
        """
        Read until terminator or max_len bytes.

        Raises ReadTimeout if nothing arrived before the read deadline.
        """
        ...

    def flush(self) -> None:
        """Discard any unread input."""
        ...

    @property
    def is_connected(self) -> bool:
        """Check if transport is connected."""
        ...


_SETAZ = re.compile(r"setaz([-\d.]+);")
_SETEL = re.compile(r"setel([-\d.]+);")


class MockTransport:
    """
    Mock transport for testing without hardware.

    Simulates r0tor firmware replies and tracks position. Tests can also
    script exact replies or read timeouts. A scripted reply answers the
    next write in place of the simulation; a reply queued with
    after_write=False is already in the input buffer, so a flush drops it.
    """

    def __init__(self, position: AzEl = AzEl(0.0, 0.0), read_delay: float = 0.0):
        self.sent_commands: List[str] = []
        self.position: AzEl = position
        self.moving: bool = False
        self.flush_count: int = 0
        self.read_count: int = 0
        self.read_delay = read_delay
        self._connected: bool = True
        self._fail_writes: bool = False
        self._timeouts: int = 0
        self._script: Deque[bytes] = deque()
        self._pending: Deque[bytes] = deque()

    @property
    def command_count(self) -> int:
        """Number of commands sent."""
        return len(self.sent_commands)

    # === Scripting ===

    def queue_reply(self, reply: Union[str, bytes], after_write: bool = True) -> None:
        """
        Script a reply (a newline is added if missing).

        With after_write the reply answers the next write; otherwise it
        has already arrived and waits in the input buffer.
        """
        if isinstance(reply, str):
            reply = reply.encode("ascii")
        if not reply.endswith(b"\n"):
            reply += b"\n"
        if after_write:
            self._script.append(reply)
        else:
            self._pending.append(reply)

    def queue_timeout(self, count: int = 1) -> None:
        """Next `count` reads time out."""
        self._timeouts += count

    def fail_writes(self, fail: bool = True) -> None:
        """Make every write raise RotorIOError."""
        self._fail_writes = fail

    # === Transport protocol ===

    def write(self, data: bytes) -> None:
        if not self._connected or self._fail_writes:
            raise RotorIOError("Mock write failed")

        command = data.decode("ascii")
        self.sent_commands.append(command)
        reply = self._simulate(command)
        if self._script:
            self._pending.append(self._script.popleft())
        elif reply is not None:
            self._pending.append(reply.encode("ascii") + b"\n")

    def read_string(self, max_len: int, terminator: bytes = b"\n") -> bytes:
        self.read_count += 1
        if self.read_delay:
            time.sleep(self.read_delay)

        if self._timeouts:
            self._timeouts -= 1
            raise ReadTimeout("Mock read timed out")
        if not self._pending:
            raise ReadTimeout("Mock read timed out")

        item = self._pending.popleft()
        end = item.find(terminator)
        cut = end + len(terminator) if end >= 0 else len(item)
        cut = min(cut, max_len)
        # Unread bytes stay in the input buffer, as on a real port
        if item[cut:]:
            self._pending.appendleft(item[cut:])
        return item[:cut]

    def flush(self) -> None:
        self.flush_count += 1
        self._pending.clear()

    @property
    def is_connected(self) -> bool:
        return self._connected

    # === Firmware simulation ===

    def _simulate(self, command: str) -> Union[str, None]:
        """Return the reply the r0tor would send, or None."""
        if command == "getpos;":
            return f"{self.position.azimuth:06.2f};{self.position.elevation:06.2f};"

        if command == "stop;":
            self.moving = False
            return "1"

        az_match = _SETAZ.search(command)
        el_match = _SETEL.search(command)
        if az_match or el_match:
            acks = ""
            az = self.position.azimuth
            el = self.position.elevation
            if az_match:
                value = float(az_match.group(1))
                if 0.0 <= value <= 360.0:
                    az = value
                    acks += "1"
                else:
                    acks += "0"
            if el_match:
                value = float(el_match.group(1))
                if 0.0 <= value <= 180.0:
                    el = value
                    acks += "1"
                else:
                    acks += "0"
            # Simulated rotor arrives instantly
            self.position = AzEl(az, el)
            return acks

        return None

    def disconnect(self) -> None:
        """Simulate disconnection (for testing error handling)."""
        self._connected = False

    def reconnect(self) -> None:
        """Simulate reconnection."""
        self._connected = True

    def clear_history(self) -> None:
        """Clear sent commands history."""
        self.sent_commands.clear()
