"""API Routes - Domain-based routing"""

from .connection import router as connection_router
from .rotor import router as rotor_router

__all__ = [
    'connection_router',
    'rotor_router',
]
