"""
Rotor capabilities - static metadata a host reads before opening a rotor.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


# Operation table every rotor backend exposes
OPERATIONS = (
    "init",
    "cleanup",
    "open",
    "close",
    "set_position",
    "get_position",
    "park",
    "stop",
    "reset",
    "move",
    "get_info",
)


@dataclass(frozen=True)
class RotorCaps:
    """
    Immutable capability table for one rotor model.

    Serial settings and axis limits are hardware facts; the driver does not
    clamp against them.
    """
    model_id: int
    model_name: str
    mfg_name: str
    version: str
    copyright: str
    status: str
    rot_type: str = "az-el"

    port_type: str = "serial"
    serial_rate_min: int = 19200
    serial_rate_max: int = 19200
    serial_data_bits: int = 8
    serial_stop_bits: int = 1
    serial_parity: str = "none"
    serial_handshake: str = "none"
    write_delay: int = 0
    post_write_delay: int = 0
    timeout_ms: int = 400
    retry: int = 5

    min_az: float = 0.0
    max_az: float = 360.0
    min_el: float = 0.0
    max_el: float = 180.0

    @property
    def key(self) -> str:
        """Registry key, e.g. 'hambits-r0tor'."""
        return f"{self.mfg_name}-{self.model_name}".lower()

    def to_dict(self) -> dict:
        d = asdict(self)
        d["operations"] = list(OPERATIONS)
        return d


HAMBITS_CAPS = RotorCaps(
    model_id=1801,
    model_name="r0tor",
    mfg_name="Hambits",
    version="0.1",
    copyright="LGPL",
    status="alpha",
)
