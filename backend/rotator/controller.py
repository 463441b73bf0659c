"""
Rotor Controller - Single responsibility: r0tor state and operations

Every operation is built on TransactionEngine.transact(). State is owned
by this instance for one session; nothing is shared between controllers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

from core.errors import InvalidReplyError, RotorTimeoutError
from core.logger import log_move, log_ok, log_pos, log_info, log_warn
from core.planner import MotionPlanner
from core.transaction import TransactionEngine
from core.types import (
    AzEl,
    Direction,
    GetPositionCommand,
    ResetMode,
    RotorState,
    SetPositionCommand,
    StopCommand,
    is_set_position_ack,
    parse_position_reply,
)
from .caps import HAMBITS_CAPS, RotorCaps

if TYPE_CHECKING:
    from core.transport import Transport


INFO = "Hambits r0tor: open source Arduino rotor controller."


class RotorController:
    """
    Controls a Hambits r0tor az/el rotor.

    Known asymmetries, kept on purpose:
    - set_position records the target before the reply is judged and
      does not roll it back on rejection
    - get_position never updates the cached current position; only stop()
      syncs current (and target) to a read-back
    """

    def __init__(self, transport: "Transport", caps: RotorCaps = HAMBITS_CAPS):
        self.caps = caps
        self.transport = transport
        self._engine = TransactionEngine(transport, retry=caps.retry)
        self._planner = MotionPlanner(
            min_az=caps.min_az,
            max_az=caps.max_az,
            min_el=caps.min_el,
            max_el=caps.max_el,
        )
        self._state: Optional[RotorState] = None
        self._is_open = False
        self.init()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> Optional[RotorState]:
        return self._state

    @property
    def target(self) -> AzEl:
        """Last commanded position."""
        return self._require_state().target

    @property
    def position(self) -> AzEl:
        """Cached position from the last stop() read-back."""
        return self._require_state().current

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def engine(self) -> TransactionEngine:
        return self._engine

    def _require_state(self) -> RotorState:
        if self._state is None:
            raise RuntimeError("Rotor not initialised")
        return self._state

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> None:
        """Fresh zeroed state. No I/O."""
        self._state = RotorState()
        log_info(f"{self.caps.mfg_name} {self.caps.model_name} initialised")

    def cleanup(self) -> None:
        """Drop session state."""
        self._state = None
        self._is_open = False
        log_info(f"{self.caps.mfg_name} {self.caps.model_name} cleaned up")

    def open(self) -> None:
        """No handshake needed for the r0tor."""
        self._require_state()
        self._is_open = True
        log_ok("Rotor opened")

    def close(self) -> None:
        """Stop all movement. The session is closed even if the stop fails."""
        try:
            self._engine.transact(StopCommand().to_wire())
        finally:
            self._is_open = False
            log_info("Rotor closed")

    # =========================================================================
    # Core Operations
    # =========================================================================

    def set_position(self, azimuth: float, elevation: float) -> None:
        """
        Set target position and start movement.

        Raises:
            InvalidReplyError: reply lacks "11" or never arrived
            RotorIOError: command could not be written
        """
        state = self._require_state()
        log_move(f"Set position AZ={azimuth:.2f} EL={elevation:.2f}")

        state.set_target(azimuth, elevation)

        command = SetPositionCommand(azimuth, elevation)
        try:
            reply = self._engine.transact(
                command.to_wire(), True, command.reply_length
            )
        except RotorTimeoutError as e:
            raise InvalidReplyError(f"No acknowledgement for {command.to_wire()}") from e

        if not is_set_position_ack(reply):
            log_warn(f"Set position rejected: {reply!r}")
            raise InvalidReplyError(f"Set position rejected: {reply!r}")

        log_ok(f"Target accepted AZ={azimuth:.2f} EL={elevation:.2f}")

    def get_position(self) -> AzEl:
        """
        Read the rotor position.

        Does not touch cached state.

        Raises:
            InvalidReplyError: reply too short/malformed or never arrived
            RotorIOError: command could not be written
        """
        self._require_state()
        command = GetPositionCommand()
        try:
            reply = self._engine.transact(
                command.to_wire(), True, command.reply_length
            )
        except RotorTimeoutError as e:
            raise InvalidReplyError("No position reply") from e

        pos = parse_position_reply(reply)
        log_pos(f"AZ={pos.azimuth:.2f} EL={pos.elevation:.2f}")
        return pos

    def stop(self) -> AzEl:
        """
        Stop and brake, then adopt wherever the rotor ended up.

        Current and target both become the read-back position.

        Raises:
            InvalidReplyError: stop or the following read-back failed
        """
        state = self._require_state()
        log_move("Stop")

        try:
            self._engine.transact(StopCommand().to_wire())
        except Exception as e:
            raise InvalidReplyError(f"Stop failed: {e}") from e

        try:
            pos = self.get_position()
        except Exception as e:
            raise InvalidReplyError(f"Position after stop unavailable: {e}") from e

        state.sync_to(pos)
        log_ok(f"Stopped at AZ={pos.azimuth:.2f} EL={pos.elevation:.2f}")
        return pos

    def park(self) -> None:
        """Home is a fixed 0/0."""
        log_move("Park")
        self.set_position(0.0, 0.0)

    def reset(self, mode: ResetMode = ResetMode.ALL) -> None:
        """Nothing to reset on the r0tor except parking."""
        self.park()

    def move(self, direction, speed: int = 0) -> None:
        """
        Move continuously towards an end stop.

        speed is accepted for interface compatibility; the r0tor has no
        speed control.

        Raises:
            InvalidArgumentError: unknown direction
        """
        direction = Direction.parse(direction)
        target = self._planner.plan_direction_move(direction, self.target)
        log_move(f"Move {direction.value}", {"speed": speed})
        self.set_position(target.azimuth, target.elevation)

    def get_info(self) -> str:
        return INFO

    # =========================================================================
    # Status
    # =========================================================================

    def get_status(self) -> Dict[str, Any]:
        """Snapshot for the API."""
        return {
            "model": self.caps.key,
            "open": self._is_open,
            "initialised": self._state is not None,
            "state": self._state.to_dict() if self._state else None,
        }

    def get_command_history(self, limit: int = 50):
        return self._engine.get_history(limit)

