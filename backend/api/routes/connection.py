"""
Connection Routes - Connect/disconnect, status, capabilities
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..dependencies import get_app_state, AppState

router = APIRouter(tags=["connection"])


class ConnectRequest(BaseModel):
    port: str


@router.get("/ports")
def get_ports():
    """List available serial ports."""
    from core.serial_transport import SerialTransport
    return {"ports": SerialTransport.list_ports()}


@router.get("/status")
def get_status(state: AppState = Depends(get_app_state)):
    """Get current connection status and rotor state."""
    return state.get_status()


@router.get("/history")
def get_history(limit: int = 50, state: AppState = Depends(get_app_state)):
    """Get recent transaction history."""
    return {"history": state.get_command_history(limit)}


@router.get("/caps")
def get_caps():
    """Capability tables of all registered rotor backends."""
    from rotator import list_backends
    return {"backends": [caps.to_dict() for caps in list_backends()]}


@router.post("/connect")
def connect(req: ConnectRequest, state: AppState = Depends(get_app_state)):
    """Connect to the rotor controller."""
    success = state.connect(req.port)
    return {"success": success, "message": "Connected" if success else "Connection failed"}


@router.post("/disconnect")
def disconnect(state: AppState = Depends(get_app_state)):
    """Stop the rotor and disconnect."""
    state.disconnect()
    return {"success": True}
