"""
Rotor Routes - position, directional moves, stop, park, reset, info
"""

from fastapi import APIRouter
from pydantic import BaseModel

from core.types import ResetMode
from ..dependencies import require_connection

router = APIRouter(tags=["rotor"])


class PositionRequest(BaseModel):
    azimuth: float
    elevation: float


class MoveRequest(BaseModel):
    direction: str
    speed: int = 0


class ResetRequest(BaseModel):
    mode: ResetMode = ResetMode.ALL


def _state(ctrl) -> dict:
    return ctrl.state.to_dict()


@router.get("/info")
def get_info():
    """Fixed description of the connected rotor."""
    ctrl = require_connection()
    return {"info": ctrl.get_info()}


@router.get("/position")
def get_position():
    """
    Read the position back from the rotor.

    The cached state is not updated; use /stop for that.
    """
    ctrl = require_connection()
    pos = ctrl.get_position()
    return {"success": True, "position": pos.to_dict(), "state": _state(ctrl)}


@router.post("/position")
def set_position(req: PositionRequest):
    """Set target azimuth/elevation and start moving."""
    ctrl = require_connection()
    ctrl.set_position(req.azimuth, req.elevation)
    return {"success": True, "state": _state(ctrl)}


@router.post("/move")
def move(req: MoveRequest):
    """Move towards an end stop: up, down, cw, ccw."""
    ctrl = require_connection()
    ctrl.move(req.direction, req.speed)
    return {"success": True, "state": _state(ctrl)}


@router.post("/stop")
def stop():
    """Stop and sync state to where the rotor ended up."""
    ctrl = require_connection()
    pos = ctrl.stop()
    return {"success": True, "position": pos.to_dict(), "state": _state(ctrl)}


@router.post("/park")
def park():
    """Move to 0/0."""
    ctrl = require_connection()
    ctrl.park()
    return {"success": True, "state": _state(ctrl)}


@router.post("/reset")
def reset(req: ResetRequest = ResetRequest()):
    """Reset (parks the rotor)."""
    ctrl = require_connection()
    ctrl.reset(req.mode)
    return {"success": True, "state": _state(ctrl)}
