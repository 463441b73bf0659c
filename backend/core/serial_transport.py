"""
Serial Transport - Single responsibility: serial communication

Thread-safe: Uses lock to prevent concurrent access from multiple API requests.
"""

from __future__ import annotations

import serial
import serial.tools.list_ports
import threading
from typing import Optional, TYPE_CHECKING
from dataclasses import dataclass

from .errors import ReadTimeout, RotorIOError
from .logger import log_serial, log_critical, log_ok

if TYPE_CHECKING:
    from rotator.caps import RotorCaps


BAUD_RATE = 19200
DEFAULT_TIMEOUT = 0.4


@dataclass
class SerialConfig:
    baud_rate: int = BAUD_RATE
    bytesize: int = serial.EIGHTBITS
    parity: str = serial.PARITY_NONE
    stopbits: float = serial.STOPBITS_ONE
    timeout: float = DEFAULT_TIMEOUT
    xonxoff: bool = False
    rtscts: bool = False
    dsrdtr: bool = False

    @classmethod
    def from_caps(cls, caps: "RotorCaps") -> "SerialConfig":
        """Serial settings declared by a rotor's capability table"""
        parity = {
            "none": serial.PARITY_NONE,
            "even": serial.PARITY_EVEN,
            "odd": serial.PARITY_ODD,
        }[caps.serial_parity]
        return cls(
            baud_rate=caps.serial_rate_max,
            bytesize=caps.serial_data_bits,
            parity=parity,
            stopbits=caps.serial_stop_bits,
            timeout=caps.timeout_ms / 1000.0,
            rtscts=caps.serial_handshake == "hardware",
            xonxoff=caps.serial_handshake == "xonxoff",
        )


class SerialTransport:
    """
    Handles raw serial communication with the rotor controller.

    Thread-safe: All write/read operations are protected by a lock.
    The read deadline is the port timeout; retries are the caller's job.
    """

    def __init__(self, config: Optional[SerialConfig] = None):
        self.config = config or SerialConfig()
        self._serial: Optional[serial.Serial] = None
        self._connected = False
        self._lock = threading.Lock()

    @staticmethod
    def list_ports() -> list[str]:
        """List available serial ports"""
        ports = serial.tools.list_ports.comports()
        return [port.device for port in ports]

    def connect(self, port: str) -> bool:
        """Connect to a serial device path or pyserial URL (e.g. loop://)"""
        try:
            self._serial = serial.serial_for_url(
                port,
                baudrate=self.config.baud_rate,
                bytesize=self.config.bytesize,
                parity=self.config.parity,
                stopbits=self.config.stopbits,
                timeout=self.config.timeout,
                xonxoff=self.config.xonxoff,
                rtscts=self.config.rtscts,
                dsrdtr=self.config.dsrdtr,
            )
            self._connected = True
            log_ok(f"Connected to {port} @ {self.config.baud_rate}")
            return True
        except (serial.SerialException, ValueError) as e:
            self._connected = False
            log_critical(f"Failed to connect to {port}: {e}")
            raise ConnectionError(f"Failed to connect: {e}") from e

    def disconnect(self) -> None:
        """Disconnect from serial port"""
        if self._serial:
            self._serial.close()
            self._serial = None
        self._connected = False

    def _require_port(self) -> serial.Serial:
        if not self._serial or not self._connected:
            raise RotorIOError("Not connected")
        return self._serial

    def write(self, data: bytes) -> None:
        """Write the whole block or raise RotorIOError"""
        port = self._require_port()
        with self._lock:
            log_serial(">>>", data.decode("ascii", errors="replace"))
            try:
                port.write(data)
                port.flush()
            except serial.SerialException as e:
                log_critical(f"Serial write failed: {e}")
                raise RotorIOError(f"Serial write failed: {e}") from e

    def read_string(self, max_len: int, terminator: bytes = b"\n") -> bytes:
        """
        Read one terminated reply, at most max_len bytes.

        Partial data is returned as-is; only an empty read is a timeout.
        """
        port = self._require_port()
        with self._lock:
            try:
                data = port.read_until(terminator, max_len)
            except serial.SerialException as e:
                raise RotorIOError(f"Serial read failed: {e}") from e

        if not data:
            raise ReadTimeout(f"No data within {self.config.timeout}s")
        log_serial("<<<", data.decode("ascii", errors="replace"))
        return data

    def flush(self) -> None:
        """Clear input buffer"""
        port = self._require_port()
        with self._lock:
            try:
                port.reset_input_buffer()
            except serial.SerialException as e:
                raise RotorIOError(f"Serial flush failed: {e}") from e

    @property
    def is_connected(self) -> bool:
        return self._connected
