"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.transport import MockTransport
from rotator.controller import RotorController


@pytest.fixture
def mock_transport() -> MockTransport:
    """Simulated r0tor at 0/0."""
    return MockTransport()


@pytest.fixture
def rotor(mock_transport) -> RotorController:
    """Opened controller on the mock transport."""
    ctrl = RotorController(mock_transport)
    ctrl.open()
    return ctrl
