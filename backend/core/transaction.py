"""
Transaction engine - one command write plus one terminated reply read.

Provides:
- TransactionEngine: write, flush-before-write, bounded read retry
- TransactionRecord: auditable result of one transaction
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from .errors import ReadTimeout, RotorTimeoutError
from .logger import log_critical, log_retry, log_warn

if TYPE_CHECKING:
    from .transport import Transport


REPLY_TERMINATOR = b"\n"
DEFAULT_RETRY = 5


@dataclass
class TransactionRecord:
    """
    Result of one transaction.

    Kept in the engine history for debugging/audit.
    """
    command: Optional[str]
    reply: str
    attempts: int
    timestamp: datetime
    success: bool
    error: Optional[str] = None

    def __str__(self) -> str:
        status = "✓" if self.success else "✗"
        reply = self.reply if self.success else self.error
        return f"[{self.timestamp:%H:%M:%S}] {status} {self.command} → {reply}"


class TransactionEngine:
    """
    Sends commands and reads replies over a Transport.

    Thread-safe: a lock is held across flush, write and the read retries,
    so concurrent API requests cannot interleave on the link. Only reads
    are retried; a failed write is surfaced straight away.
    """

    def __init__(self, transport: "Transport", retry: int = DEFAULT_RETRY):
        if retry < 1:
            raise ValueError(f"retry must be >= 1, got {retry}")
        self.transport = transport
        self.retry = retry
        self._history: List[TransactionRecord] = []
        self._last_attempts = 0
        self._lock = threading.RLock()

    def transact(
        self,
        command: Optional[str],
        wants_reply: bool = False,
        expected_reply_len: int = 0,
    ) -> str:
        """
        Run one transaction.

        Args:
            command: ASCII command, or None to only read
            wants_reply: read one reply after writing
            expected_reply_len: longest reply the caller expects

        Returns:
            The reply without its terminator, or "" when no reply is wanted.

        Raises:
            RotorIOError: transport write/flush failed
            RotorTimeoutError: no reply within the retry budget
        """
        # CRITICAL: flush, write and read are one exchange on the link
        with self._lock:
            timestamp = datetime.now()
            self._last_attempts = 0

            try:
                if wants_reply:
                    # Stale bytes from an earlier exchange would misalign the reply
                    self.transport.flush()

                if command:
                    self.transport.write(command.encode("ascii"))

                reply = self.read_reply(expected_reply_len) if wants_reply else ""
            except Exception as e:
                self._record(command, "", timestamp, error=e)
                raise

            self._record(command, reply, timestamp)
            return reply

    def read_reply(self, expected_reply_len: int) -> str:
        """
        Read one newline-terminated reply, retrying on timeout.

        Exits with the reply on the first successful read, or with
        RotorTimeoutError once `retry` reads have timed out.
        """
        max_len = expected_reply_len + 1

        with self._lock:
            for attempt in range(1, self.retry + 1):
                self._last_attempts = attempt
                try:
                    data = self.transport.read_string(max_len, REPLY_TERMINATOR)
                except ReadTimeout:
                    log_retry(f"Read timeout, attempt {attempt}/{self.retry}")
                    continue
                return data.decode("ascii", errors="replace").rstrip("\r\n")

            log_critical(f"No reply after {self.retry} read attempts")
            raise RotorTimeoutError(f"No reply after {self.retry} read attempts")

    def _record(
        self,
        command: Optional[str],
        reply: str,
        timestamp: datetime,
        error: Optional[Exception] = None,
    ) -> None:
        if error is not None:
            log_warn(f"Transaction {command!r} failed: {error}")
        self._history.append(TransactionRecord(
            command=command,
            reply=reply,
            attempts=self._last_attempts,
            timestamp=timestamp,
            success=error is None,
            error=str(error) if error is not None else None,
        ))

    def get_history(self, limit: int | None = None) -> List[TransactionRecord]:
        """
        Get transaction history.

        Args:
            limit: Optional max number of recent entries to return.
        """
        if limit is None:
            return list(self._history)
        return list(self._history[-limit:])

    def get_last_record(self) -> TransactionRecord | None:
        """Get most recent transaction record."""
        return self._history[-1] if self._history else None

    def clear_history(self) -> None:
        """Clear transaction history."""
        self._history.clear()
