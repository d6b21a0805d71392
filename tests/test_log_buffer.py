"""
Tests for the bounded log buffer

Tests:
- Capacity bound under concurrent appends
- Tail ordering and limits
- Handler attach/detach lifecycle and exception capture
"""

import logging
import threading
from datetime import datetime

import pytest

from bifrost_mcp_server.core import LogBuffer
from bifrost_mcp_server.core.log_buffer import LogEntry
from bifrost_mcp_server.core.types import ReadResourceParams
from bifrost_mcp_server.resources import ConsoleLogsResource


class TestLogBuffer:
    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            LogBuffer(capacity=0)

    def test_oldest_entries_dropped(self):
        buffer = LogBuffer(capacity=3)
        for i in range(5):
            buffer.append(LogEntry(message=str(i)))

        assert len(buffer) == 3
        assert [e.message for e in buffer.tail(10)] == ["2", "3", "4"]

    def test_tail_limits(self):
        buffer = LogBuffer()
        for i in range(5):
            buffer.append(LogEntry(message=str(i)))

        assert [e.message for e in buffer.tail(2)] == ["3", "4"]
        assert buffer.tail(0) == []

    def test_clear(self):
        buffer = LogBuffer()
        buffer.append(LogEntry(message="x"))
        buffer.clear()
        assert len(buffer) == 0

    def test_entry_format(self):
        entry = LogEntry(
            message="hello",
            type="ERROR",
            stack_trace="trace",
            timestamp=datetime(2024, 5, 1, 13, 4, 5),
        )
        assert entry.to_dict() == {
            "timestamp": "2024-05-01 13:04:05",
            "type": "ERROR",
            "message": "hello",
            "stackTrace": "trace",
        }

    @pytest.mark.asyncio
    async def test_concurrent_appends_respect_capacity(self):
        buffer = LogBuffer(capacity=1000)

        def writer(offset):
            for i in range(150):
                buffer.append(LogEntry(message=f"w{offset}-{i}"))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        resource = ConsoleLogsResource(buffer, read_limit=100)
        payload = (await resource.read(ReadResourceParams(uri=resource.uri))).payload

        assert payload["totalLogs"] == 1000
        assert payload["returnedLogs"] == 100


class TestLogBufferHandler:
    def test_attach_and_detach(self, capture_logger):
        buffer = LogBuffer()
        buffer.attach(capture_logger)
        assert buffer.attached

        capture_logger.info("first")
        buffer.detach()
        capture_logger.info("second")

        assert not buffer.attached
        assert [e.message for e in buffer.tail(10)] == ["first"]

    def test_attach_twice_adds_one_handler(self, capture_logger):
        buffer = LogBuffer()
        before = len(capture_logger.handlers)
        buffer.attach(capture_logger)
        buffer.attach(capture_logger)
        try:
            assert len(capture_logger.handlers) == before + 1
        finally:
            buffer.detach()
        assert len(capture_logger.handlers) == before

    def test_exception_stack_trace_captured(self, capture_logger):
        buffer = LogBuffer()
        buffer.attach(capture_logger)
        try:
            try:
                raise RuntimeError("bad asset")
            except RuntimeError:
                capture_logger.exception("import failed")
        finally:
            buffer.detach()

        entry = buffer.tail(1)[0]
        assert entry.type == "ERROR"
        assert "RuntimeError: bad asset" in entry.stack_trace

    def test_level_filter(self, capture_logger):
        buffer = LogBuffer()
        buffer.attach(capture_logger, level=logging.WARNING)
        try:
            capture_logger.info("quiet")
            capture_logger.error("loud")
        finally:
            buffer.detach()

        assert [e.message for e in buffer.tail(10)] == ["loud"]
