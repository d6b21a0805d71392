"""
Resource Base Model

Base class for read-only resources exposing host application snapshots
under the app:// URI scheme, plus URI helpers for query-style suffixes.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

from ..responses.resource import ResourceResponse
from ..types.mcp import (
    DEFAULT_MIME_TYPE,
    JSONRPCNotification,
    ReadResourceParams,
    ResourceDescriptor,
    ResourceReadResult,
)

logger = logging.getLogger(__name__)

APP_SCHEME = "app"

ResourceSubscriber = Callable[[JSONRPCNotification], None]


def parse_app_uri(uri: str) -> Optional[Dict[str, Any]]:
    """
    Parse an app:// URI.

    Format: app://{path}[?key=value&...]

    Args:
        uri: URI to parse

    Returns:
        Dict with scheme, path and query (first value per key),
        or None if the URI is not an app:// URI
    """
    parts = urlsplit(uri)
    if parts.scheme != APP_SCHEME or not parts.netloc:
        return None

    path = parts.netloc + parts.path
    query = {key: values[0] for key, values in parse_qs(parts.query).items()}
    return {"scheme": parts.scheme, "path": path.rstrip("/"), "query": query}


def base_uri(uri: str) -> str:
    """Return `uri` without its query-style suffix"""
    return uri.split("?", 1)[0]


class Resource(ABC):
    """
    Base class for MCP resources.

    Subclasses must define:
    - uri: str - Unique app:// URI
    - name: str - Human-readable name
    - description: str - What the snapshot contains
    - read(params) - Produce the snapshot

    The handler passes the raw requested URI through in `params.uri`;
    resources that accept a query-style suffix parse it themselves with
    `self.query(params)`.

    Example:
        ```python
        class SelectionResource(Resource):
            uri = "app://selection"
            name = "Current Selection"
            description = "Currently selected objects"

            async def read(self, params):
                return self.json_result(params, {"activeObject": "Cube"})
        ```
    """

    uri: str
    name: str
    description: str
    mime_type: str = DEFAULT_MIME_TYPE

    def __init__(self):
        self._subscribers: List[ResourceSubscriber] = []
        self._subscribers_lock = threading.Lock()

    @abstractmethod
    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        """
        Read the resource.

        Args:
            params: Read parameters carrying the raw requested URI

        Returns:
            ResourceReadResult tagged with the resource's MIME type
        """

    def to_descriptor(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            uri=self.uri,
            name=self.name,
            description=self.description,
            mime_type=self.mime_type,
        )

    @staticmethod
    def query(params: ReadResourceParams) -> Dict[str, str]:
        """Query-style suffix of the requested URI as a dict"""
        parsed = parse_app_uri(params.uri)
        return parsed["query"] if parsed else {}

    # =============================================================================
    # Result helpers
    # =============================================================================

    def text_result(
        self, params: ReadResourceParams, text: str
    ) -> ResourceReadResult:
        return ResourceResponse.text_result(params.uri, text, self.mime_type)

    def json_result(
        self, params: ReadResourceParams, data: Any
    ) -> ResourceReadResult:
        return ResourceResponse.json_result(params.uri, data)

    # =============================================================================
    # Subscriptions
    # =============================================================================

    def subscribe(self, callback: ResourceSubscriber) -> None:
        with self._subscribers_lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def unsubscribe(self, callback: ResourceSubscriber) -> None:
        with self._subscribers_lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        with self._subscribers_lock:
            return len(self._subscribers)

    def notify_subscribers(self, update: JSONRPCNotification) -> None:
        """
        Deliver `update` to every subscriber.

        A failing subscriber is logged and does not stop delivery to the rest.
        """
        with self._subscribers_lock:
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(update)
            except Exception as e:
                logger.error(f"Error notifying subscriber for resource {self.uri}: {e}")
