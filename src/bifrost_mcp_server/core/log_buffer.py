"""
Bounded in-memory log tail.

LogBuffer keeps the most recent host log entries for the console-logs
resource. It is created at server start, attached to a logger explicitly,
and detached at shutdown.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional

DEFAULT_CAPACITY = 1000


@dataclass(frozen=True)
class LogEntry:
    """One captured log record"""

    message: str
    type: str = "INFO"
    stack_trace: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "type": self.type,
            "message": self.message,
            "stackTrace": self.stack_trace,
        }


class LogBufferHandler(logging.Handler):
    """logging.Handler that appends every record to a LogBuffer"""

    def __init__(self, buffer: "LogBuffer", level: int = logging.NOTSET):
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stack_trace = ""
            if record.exc_info:
                stack_trace = logging.Formatter().formatException(record.exc_info)
            elif record.stack_info:
                stack_trace = record.stack_info

            self.buffer.append(
                LogEntry(
                    message=record.getMessage(),
                    type=record.levelname,
                    stack_trace=stack_trace,
                    timestamp=datetime.fromtimestamp(record.created),
                )
            )
        except Exception:
            self.handleError(record)


class LogBuffer:
    """
    Ring buffer of the most recent log entries.

    Appends and reads are serialized by one lock, so a reader never sees a
    collection that is mid-update. Once `capacity` entries are held the
    oldest entry is dropped for each new one.

    Example:
        ```python
        buffer = LogBuffer(capacity=1000)
        buffer.attach(logging.getLogger())
        ...
        recent = buffer.tail(100)
        buffer.detach()
        ```
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Log buffer capacity must be positive, got {capacity}")

        self.capacity = capacity
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._handler: Optional[LogBufferHandler] = None
        self._logger: Optional[logging.Logger] = None

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def tail(self, limit: int) -> List[LogEntry]:
        """
        Most recent entries, oldest first.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Up to `limit` entries
        """
        with self._lock:
            if limit <= 0:
                return []
            return list(self._entries)[-limit:]

    def snapshot(self, limit: int):
        """
        Retained count and the most recent entries, read under one lock.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Tuple of (total retained, list of entries)
        """
        with self._lock:
            entries = list(self._entries)
        return len(entries), entries[-limit:] if limit > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # =============================================================================
    # Lifecycle
    # =============================================================================

    @property
    def attached(self) -> bool:
        return self._handler is not None

    def attach(
        self, target: Optional[logging.Logger] = None, level: int = logging.NOTSET
    ) -> None:
        """
        Start capturing records from `target` (the root logger by default).

        Args:
            target: Logger whose records feed the buffer
            level: Minimum level captured
        """
        if self._handler is not None:
            return

        self._logger = target or logging.getLogger()
        self._handler = LogBufferHandler(self, level)
        self._logger.addHandler(self._handler)

    def detach(self) -> None:
        """Stop capturing records. Retained entries are kept."""
        if self._handler is None:
            return

        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
        self._logger = None
