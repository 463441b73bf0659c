"""
API Dependencies - Dependency injection for FastAPI

Holds the one rotor session the API drives.
"""

from dataclasses import dataclass
from typing import Optional, List, Dict, Any
import sys
import os

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.errors import RotorError
from core.logger import log_critical, log_warn
from core.transport import MockTransport
from core.serial_transport import SerialConfig, SerialTransport
from rotator import HAMBITS_CAPS, RotorController, create_rotor


@dataclass
class AppState:
    """
    Application state container.

    One transport, one controller, one session.
    """
    model: str = HAMBITS_CAPS.key
    controller: Optional[RotorController] = None
    _transport: Optional[Any] = None

    @property
    def is_connected(self) -> bool:
        return self._transport is not None and self._transport.is_connected

    def connect(self, port: str) -> bool:
        """Open the transport and start a rotor session."""
        if self.controller is not None:
            self.disconnect()

        try:
            # Use mock for testing, real serial for production
            if port == "mock":
                self._transport = MockTransport()
            else:
                self._transport = SerialTransport(SerialConfig.from_caps(HAMBITS_CAPS))
                if not self._transport.connect(port):
                    return False

            self.controller = create_rotor(self.model, self._transport)
            self.controller.open()
            return True
        except ConnectionError as e:
            log_critical(f"Connection error: {e}")
            self._transport = None
            self.controller = None
            return False

    def disconnect(self) -> None:
        """Stop the rotor, end the session, release the port."""
        try:
            if self.controller is not None and self.is_connected:
                self.controller.close()
        except RotorError as e:
            log_warn(f"Stop on close failed: {e}")
        finally:
            if self.controller is not None:
                self.controller.cleanup()
            if hasattr(self._transport, 'disconnect'):
                self._transport.disconnect()
            self._transport = None
            self.controller = None

    def get_status(self) -> Dict[str, Any]:
        """Get current status for API."""
        if self.controller:
            return {"connected": True, **self.controller.get_status()}
        return {
            "connected": False,
            "model": self.model,
            "open": False,
            "initialised": False,
            "state": None,
        }

    def get_command_history(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Get recent transaction history."""
        if not self.controller:
            return []

        history = self.controller.get_command_history(limit)
        return [
            {
                "command": r.command,
                "reply": r.reply,
                "attempts": r.attempts,
                "success": r.success,
                "error": r.error,
                "timestamp": r.timestamp.isoformat(),
            }
            for r in history
        ]


# Global instance
_app_state: Optional[AppState] = None


def get_app_state() -> AppState:
    """Get the global app state instance."""
    global _app_state
    if _app_state is None:
        _app_state = AppState()
    return _app_state


def require_connection() -> RotorController:
    """Get controller, raising error if not connected."""
    from fastapi import HTTPException

    state = get_app_state()
    if not state.is_connected or state.controller is None:
        raise HTTPException(status_code=400, detail="Not connected to rotor")
    return state.controller
