"""Core infrastructure layer - transport, transaction engine, protocol types"""

from .serial_transport import SerialTransport
from .transaction import TransactionEngine
from .transport import MockTransport

__all__ = ['SerialTransport', 'TransactionEngine', 'MockTransport']
