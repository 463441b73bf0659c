"""
Integration tests for the backend registry and capability table.
"""

import pytest

from core.transport import MockTransport
from rotator import (
    HAMBITS_CAPS,
    OPERATIONS,
    RotorController,
    create_rotor,
    get_backend,
    list_backends,
    register_backend,
)


class TestCaps:

    def test_hambits_caps(self):
        caps = HAMBITS_CAPS
        assert caps.model_name == "r0tor"
        assert caps.mfg_name == "Hambits"
        assert caps.serial_rate_min == caps.serial_rate_max == 19200
        assert caps.timeout_ms == 400
        assert caps.retry == 5
        assert (caps.min_az, caps.max_az) == (0.0, 360.0)
        assert (caps.min_el, caps.max_el) == (0.0, 180.0)

    def test_to_dict_lists_operations(self):
        data = HAMBITS_CAPS.to_dict()
        assert data["operations"] == list(OPERATIONS)
        assert data["model_name"] == "r0tor"


class TestRegistry:

    def test_r0tor_registered_on_import(self):
        assert HAMBITS_CAPS in list_backends()

    @pytest.mark.parametrize("name", ["hambits-r0tor", "r0tor", "R0TOR"])
    def test_lookup(self, name):
        assert get_backend(name).caps is HAMBITS_CAPS

    def test_unknown_backend(self):
        with pytest.raises(KeyError):
            get_backend("gs232")

    def test_create_rotor(self):
        transport = MockTransport()
        ctrl = create_rotor("r0tor", transport)

        assert isinstance(ctrl, RotorController)
        assert ctrl.engine.retry == HAMBITS_CAPS.retry

    def test_controller_implements_operation_table(self):
        for op in OPERATIONS:
            assert callable(getattr(RotorController, op))

    def test_rejects_incomplete_backend(self):
        class Partial:
            def open(self):
                pass

        with pytest.raises(TypeError, match="missing operations"):
            register_backend(HAMBITS_CAPS, Partial)
        assert get_backend("r0tor").factory is RotorController
