"""
Resource Registry

Thread-safe mapping from resource URI to Resource instance.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from ..types.mcp import ListResourcesResult
from .base import Resource, base_uri, parse_app_uri

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Registry for MCP resources, keyed by URI (last write wins)"""

    def __init__(self):
        self._resources: Dict[str, Resource] = {}
        self._listeners: List[Callable[[], None]] = []
        self._lock = threading.RLock()

    def register(self, resource: Resource) -> None:
        """
        Register a resource.

        Args:
            resource: Resource to register; replaces any resource with the same URI
        """
        uri = resource.uri

        if parse_app_uri(uri) is None:
            logger.warning(f"Resource {uri} does not use the app:// scheme")

        with self._lock:
            if uri in self._resources and self._resources[uri] is not resource:
                logger.warning(f"Resource {uri} already registered, replacing")
            self._resources[uri] = resource

        logger.info(f"Registered resource: {uri}")
        self._notify_listeners()

    def unregister(self, uri: str) -> None:
        """
        Unregister a resource by URI. Unknown URIs are ignored.

        Args:
            uri: Resource URI to unregister
        """
        with self._lock:
            removed = self._resources.pop(uri, None)

        if removed is not None:
            logger.info(f"Unregistered resource: {uri}")
            self._notify_listeners()

    def has(self, uri: str) -> bool:
        with self._lock:
            return uri in self._resources

    def get(self, uri: str) -> Optional[Resource]:
        """
        Get a resource by URI.

        Args:
            uri: Resource URI

        Returns:
            Resource if found, None otherwise
        """
        with self._lock:
            return self._resources.get(uri)

    def resolve(self, uri: str) -> Optional[Resource]:
        """
        Find the resource a requested URI addresses.

        The URI without its query suffix is tried first, then the raw URI,
        so `app://assets/list?type=Material` resolves to `app://assets/list`.

        Args:
            uri: Raw requested URI

        Returns:
            Resource if found, None otherwise
        """
        with self._lock:
            return self._resources.get(base_uri(uri)) or self._resources.get(uri)

    def get_all(self) -> List[Resource]:
        """
        List all resources.

        Returns:
            Snapshot of resources in registration order
        """
        with self._lock:
            return list(self._resources.values())

    def clear(self) -> None:
        with self._lock:
            had_resources = bool(self._resources)
            self._resources.clear()

        if had_resources:
            self._notify_listeners()

    def get_mcp_resources_list(self) -> ListResourcesResult:
        """
        Generate MCP resources/list response.

        Returns:
            ListResourcesResult with one descriptor per registered resource
        """
        resources = [resource.to_descriptor() for resource in self.get_all()]
        logger.debug(f"Generated MCP resources list: {len(resources)} resources")
        return ListResourcesResult(resources=resources)

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Call `listener` after every change to the set of resources"""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Resource registry listener failed: {e}", exc_info=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)

    def __contains__(self, uri: str) -> bool:
        return self.has(uri)
