"""
Tool execution context.

This module defines ExecutionContext, which is passed to every tool
execution, and the CancellationToken it carries. A context lives for exactly
one call and is never stored beyond it.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .types.mcp import RequestId


class ToolCancelledError(Exception):
    """Raised inside a tool when its call has been cancelled"""


class CancellationToken:
    """
    Cooperative cancellation signal for one call.

    The transport sets it when a `notifications/cancelled` arrives; tools
    check it between units of work. Setting and reading are thread safe.

    Example:
        ```python
        async def execute(self, params, ctx):
            for node in nodes:
                ctx.cancellation.raise_if_cancelled()
                visit(node)
        ```
    """

    def __init__(self):
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        """Signal cancellation, keeping the first reason given"""
        if not self._event.is_set():
            self._reason = reason or "Request cancelled"
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ToolCancelledError(self._reason)


@dataclass(frozen=True)
class ServerContext:
    """Snapshot of host facts taken when the call starts"""

    current_scene: Optional[str] = None
    project_path: Optional[str] = None
    app_version: Optional[str] = None


@dataclass
class ExecutionContext:
    """
    Execution context for a tool call.

    Attributes:
        client_id: Caller identity supplied by the transport
        request_id: JSON-RPC id of the call, if any
        request_time: When the handler accepted the call (UTC)
        server_context: Host facts at call start
        cancellation: Token signalled when the caller cancels
    """

    client_id: str = "mcp-client"
    request_id: RequestId = None
    request_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    server_context: ServerContext = field(default_factory=ServerContext)
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    def get_duration(self) -> float:
        """Seconds elapsed since the call was accepted"""
        return (datetime.now(timezone.utc) - self.request_time).total_seconds()
