"""Rotor backends - r0tor controller, capabilities, registry"""

from .caps import HAMBITS_CAPS, OPERATIONS, RotorCaps
from .controller import RotorController
from .registry import create_rotor, get_backend, list_backends, register_backend

register_backend(HAMBITS_CAPS, RotorController)

__all__ = [
    'HAMBITS_CAPS', 'OPERATIONS', 'RotorCaps', 'RotorController',
    'create_rotor', 'get_backend', 'list_backends', 'register_backend',
]
