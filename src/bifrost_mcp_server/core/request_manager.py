"""
Request Manager - tracks in-flight tool calls.

Maps JSON-RPC request ids to the cancellation token of the call that is
running under that id, so a `notifications/cancelled` arriving on another
request can reach it.
"""

import asyncio
import logging
from typing import Dict, Optional

from .context import CancellationToken
from .types.mcp import RequestId

logger = logging.getLogger(__name__)


class RequestManager:
    """
    Registry of active calls owned by one protocol handler.

    This is a framework component - tools don't interact with it directly.
    Unknown or already finished requests are ignored on cancellation.
    """

    def __init__(self):
        self._requests: Dict[str, CancellationToken] = {}
        self._lock = asyncio.Lock()

    async def register_request(
        self, request_id: RequestId, token: CancellationToken
    ) -> None:
        """
        Start tracking a call.

        Args:
            request_id: JSON-RPC id of the call
            token: Cancellation token handed to the tool
        """
        if request_id is None:
            return
        async with self._lock:
            self._requests[str(request_id)] = token
            logger.debug(f"Registered request: {request_id}")

    async def cancel_request(
        self, request_id: RequestId, reason: Optional[str] = None
    ) -> bool:
        """
        Signal cancellation for a request.

        Args:
            request_id: ID of request to cancel
            reason: Optional reason for cancellation

        Returns:
            True if request was found and cancelled, False if unknown
        """
        async with self._lock:
            token = self._requests.get(str(request_id))
            if token is None:
                logger.debug(
                    f"Cancellation requested for unknown request: {request_id}"
                )
                return False

            token.cancel(reason)
            logger.info(f"Cancelled request {request_id}: {token.reason}")
            return True

    async def cleanup_request(self, request_id: RequestId) -> None:
        """
        Stop tracking a call.

        Args:
            request_id: ID of request to clean up
        """
        if request_id is None:
            return
        async with self._lock:
            if self._requests.pop(str(request_id), None) is not None:
                logger.debug(f"Cleaned up request: {request_id}")

    def __len__(self) -> int:
        return len(self._requests)
