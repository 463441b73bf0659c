"""
Backend registry - lets a host find a rotor backend by name.

A backend is its capability table plus a factory that builds a controller
on a transport. The controllers know nothing about this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, TYPE_CHECKING

from core.logger import log_info
from .caps import OPERATIONS, RotorCaps

if TYPE_CHECKING:
    from core.transport import Transport


@dataclass(frozen=True)
class Backend:
    caps: RotorCaps
    factory: Callable


_backends: Dict[str, Backend] = {}


def register_backend(caps: RotorCaps, factory: Callable) -> Backend:
    """
    Register a backend under caps.key.

    The factory is called as factory(transport, caps) and must return an
    object with every method in OPERATIONS.
    """
    missing = [op for op in OPERATIONS if not hasattr(factory, op)]
    if missing:
        raise TypeError(f"{caps.key} backend missing operations: {missing}")

    backend = Backend(caps=caps, factory=factory)
    _backends[caps.key] = backend
    log_info(f"Registered rotor backend {caps.key}", {"model_id": caps.model_id})
    return backend


def get_backend(name: str) -> Backend:
    """Look up by key ('hambits-r0tor') or bare model name ('r0tor')."""
    name = name.lower()
    if name in _backends:
        return _backends[name]
    for backend in _backends.values():
        if backend.caps.model_name.lower() == name:
            return backend
    raise KeyError(f"Unknown rotor backend: {name}")


def list_backends() -> List[RotorCaps]:
    return [b.caps for b in _backends.values()]


def create_rotor(name: str, transport: "Transport"):
    """Build a controller for the named backend on `transport`."""
    backend = get_backend(name)
    return backend.factory(transport, backend.caps)
