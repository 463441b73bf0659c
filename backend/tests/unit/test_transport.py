"""
Unit tests for the transport layer.

MockTransport firmware simulation and scripting, plus SerialTransport
against pyserial's loop:// URL.
"""

import pytest

from core.errors import ReadTimeout, RotorIOError
from core.serial_transport import SerialConfig, SerialTransport
from core.transport import MockTransport
from core.types import AzEl
from rotator.caps import HAMBITS_CAPS


class TestMockTransport:
    """Tests for MockTransport."""

    def test_tracks_sent_commands(self):
        transport = MockTransport()
        transport.write(b"getpos;")
        transport.write(b"stop;")

        assert transport.sent_commands == ["getpos;", "stop;"]
        assert transport.command_count == 2

    def test_set_position_acks_both_axes(self):
        transport = MockTransport()
        transport.write(b"setaz123.45;setel067.89;")

        assert transport.read_string(3) == b"11\n"
        assert transport.position == AzEl(123.45, 67.89)

    def test_out_of_range_axis_rejected(self):
        transport = MockTransport()
        transport.write(b"setaz400.00;setel010.00;")

        assert transport.read_string(3) == b"01\n"
        assert transport.position == AzEl(0.0, 10.0)

    def test_getpos_reports_position(self):
        transport = MockTransport(position=AzEl(5.5, 90))
        transport.write(b"getpos;")

        assert transport.read_string(16) == b"005.50;090.00;\n"

    def test_stop_acks(self):
        transport = MockTransport()
        transport.moving = True
        transport.write(b"stop;")

        assert transport.read_string(16) == b"1\n"
        assert not transport.moving

    def test_flush_discards_pending_reply(self):
        transport = MockTransport()
        transport.write(b"getpos;")
        transport.flush()

        with pytest.raises(ReadTimeout):
            transport.read_string(16)

    def test_scripted_reply_first(self):
        transport = MockTransport()
        transport.queue_reply("010.00;020.00;")
        transport.write(b"getpos;")

        assert transport.read_string(16) == b"010.00;020.00;\n"

    def test_scripted_reply_waits_for_write(self):
        transport = MockTransport()
        transport.queue_reply("11")

        with pytest.raises(ReadTimeout):
            transport.read_string(3)

        transport.write(b"setaz010.00;setel020.00;")
        assert transport.read_string(3) == b"11\n"

    def test_flush_drops_arrived_reply(self):
        transport = MockTransport()
        transport.queue_reply("1", after_write=False)
        transport.flush()

        with pytest.raises(ReadTimeout):
            transport.read_string(3)

    def test_arrived_reply_readable_without_write(self):
        transport = MockTransport()
        transport.queue_reply("1", after_write=False)

        assert transport.read_string(3) == b"1\n"

    def test_long_reply_leaves_remainder_buffered(self):
        transport = MockTransport()
        transport.queue_reply("1111111")
        transport.write(b"setaz010.00;setel020.00;")

        assert transport.read_string(3) == b"111"
        assert transport.read_string(16) == b"1111\n"

    def test_remainder_dropped_by_flush(self):
        transport = MockTransport()
        transport.write(b"getpos;")
        transport.read_string(3)
        transport.flush()

        with pytest.raises(ReadTimeout):
            transport.read_string(16)

    def test_scripted_timeouts(self):
        transport = MockTransport()
        transport.queue_timeout(2)
        transport.queue_reply("11")
        transport.write(b"setaz010.00;setel020.00;")

        for _ in range(2):
            with pytest.raises(ReadTimeout):
                transport.read_string(3)
        assert transport.read_string(3) == b"11\n"

    def test_fail_writes(self):
        transport = MockTransport()
        transport.fail_writes()

        with pytest.raises(RotorIOError):
            transport.write(b"stop;")
        assert transport.sent_commands == []

    def test_disconnect(self):
        transport = MockTransport()
        transport.disconnect()
        assert not transport.is_connected

        with pytest.raises(RotorIOError):
            transport.write(b"stop;")

        transport.reconnect()
        assert transport.is_connected


class TestSerialConfig:
    """Serial settings."""

    def test_defaults_are_19200_8n1(self):
        config = SerialConfig()
        assert config.baud_rate == 19200
        assert config.bytesize == 8
        assert config.parity == "N"
        assert config.stopbits == 1
        assert not config.rtscts and not config.xonxoff

    def test_from_caps(self):
        config = SerialConfig.from_caps(HAMBITS_CAPS)
        assert config.baud_rate == 19200
        assert config.timeout == pytest.approx(0.4)


class TestSerialTransport:
    """SerialTransport over a pyserial loopback."""

    @pytest.fixture
    def loop(self):
        transport = SerialTransport(SerialConfig(timeout=0.05))
        transport.connect("loop://")
        yield transport
        transport.disconnect()

    def test_not_connected_raises(self):
        transport = SerialTransport()
        with pytest.raises(RotorIOError):
            transport.write(b"stop;")

    def test_connect_failure(self):
        transport = SerialTransport()
        with pytest.raises(ConnectionError):
            transport.connect("/dev/does-not-exist-r0tor")
        assert not transport.is_connected

    def test_read_until_terminator(self, loop):
        loop.write(b"11\n")
        assert loop.read_string(3) == b"11\n"

    def test_read_respects_max_len(self, loop):
        loop.write(b"123456\n")
        assert loop.read_string(3) == b"123"

    def test_empty_read_is_timeout(self, loop):
        with pytest.raises(ReadTimeout):
            loop.read_string(3)

    def test_flush_discards_input(self, loop):
        loop.write(b"stale\n")
        loop.flush()
        with pytest.raises(ReadTimeout):
            loop.read_string(8)

    def test_disconnect(self, loop):
        loop.disconnect()
        assert not loop.is_connected
