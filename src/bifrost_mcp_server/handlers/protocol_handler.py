"""
MCP Protocol Handler

Session-level entry point for every MCP method:
- Lifecycle: initialize, ping, notifications/initialized
- Tools: tools/list, tools/call
- Resources: resources/list, resources/read, resources/subscribe,
  resources/unsubscribe
- Notifications: cancelled, list_changed fan-out
- Logging: logging/setLevel

The handler is transport-agnostic; server.py adapts it to JSON-RPC over HTTP.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from ..core import (
    InvalidParamsError,
    InvalidRequestError,
    NotInitializedError,
    NotificationResponse,
    RequestManager,
    ResourceRegistry,
    ServerContext,
    ToolRegistry,
)
from ..core.types import (
    CallToolParams,
    Capabilities,
    InitializeParams,
    InitializeResult,
    JSONRPCNotification,
    ListResourcesResult,
    ListToolsResult,
    ReadResourceParams,
    RequestId,
    ResourceReadResult,
    ServerInfo,
    ToolCallResult,
)
from ..host import HostApplication
from .resource_handler import (
    handle_resources_list,
    handle_resources_read,
    handle_resources_subscribe,
    handle_resources_unsubscribe,
    resolve_resource,
)
from .tool_handler import format_validation_error, handle_tools_call, handle_tools_list

logger = logging.getLogger(__name__)

SERVER_NAME = "Bifrost MCP Server"
SERVER_VERSION = "2.0.0"

DEFAULT_PROTOCOL_VERSION = "2024-11-05"
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")

# MCP log levels -> Python logging levels
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}

NotificationListener = Callable[[JSONRPCNotification], None]


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class ProtocolHandler:
    """
    Dispatches MCP operations to the tool and resource registries.

    Protocol-level failures raise MCPError subclasses; tool execution
    failures are returned in-band as ToolCallResult with isError set.

    With `strict_handshake` enabled, every method except initialize and ping
    raises NotInitializedError until initialize has succeeded.

    Example:
        ```python
        handler = ProtocolHandler(tools, resources, host=InMemoryHost())
        await handler.initialize(
            {"protocolVersion": "2024-11-05", "clientInfo": {"name": "cli", "version": "1"}}
        )
        result = await handler.call_tool({"name": "analyze_scene", "arguments": {}})
        ```
    """

    def __init__(
        self,
        tool_registry: ToolRegistry,
        resource_registry: ResourceRegistry,
        host: Optional[HostApplication] = None,
        strict_handshake: bool = False,
    ):
        self.tool_registry = tool_registry
        self.resource_registry = resource_registry
        self.host = host
        self.strict_handshake = strict_handshake

        self.state = SessionState.UNINITIALIZED
        self.protocol_version: Optional[str] = None
        self.client_name: Optional[str] = None
        self.request_manager = RequestManager()

        self._listeners: List[NotificationListener] = []
        self._listeners_lock = threading.Lock()

        self.tool_registry.add_listener(self._on_tools_changed)
        self.resource_registry.add_listener(self._on_resources_changed)

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    def _require_ready(self, method: str) -> None:
        if self.strict_handshake and not self.is_ready:
            raise NotInitializedError(
                f"Server not initialized: '{method}' requires a successful initialize"
            )

    # =============================================================================
    # Lifecycle
    # =============================================================================

    async def initialize(
        self, params: Union[InitializeParams, Dict[str, Any], None]
    ) -> InitializeResult:
        """
        Handle MCP initialize request.

        Args:
            params: protocolVersion and clientInfo from the client

        Returns:
            InitializeResult with protocol version, server identity and capabilities

        Raises:
            InvalidRequestError: If the parameters are malformed
        """
        if isinstance(params, InitializeParams):
            init = params
        else:
            try:
                init = InitializeParams.model_validate(params or {})
            except ValidationError as e:
                raise InvalidRequestError(
                    f"Invalid initialize parameters: {format_validation_error(e)}"
                ) from e

        if init.protocol_version in SUPPORTED_PROTOCOL_VERSIONS:
            version = init.protocol_version
        else:
            logger.warning(
                f"Client requested unsupported protocol version {init.protocol_version}, "
                f"offering {DEFAULT_PROTOCOL_VERSION}"
            )
            version = DEFAULT_PROTOCOL_VERSION

        self.protocol_version = version
        self.client_name = init.client_info.name
        self.state = SessionState.READY

        logger.info(
            f"Connected client: {init.client_info.name} v{init.client_info.version} "
            f"(protocol {version})"
        )

        return InitializeResult(
            protocol_version=version,
            server_info=ServerInfo(name=SERVER_NAME, version=SERVER_VERSION),
            capabilities=Capabilities(),
        )

    def initialized(self) -> Dict[str, Any]:
        """Handle notifications/initialized sent by the client after initialize"""
        logger.debug("Client initialized")
        return {}

    def ping(self) -> Dict[str, Any]:
        """Connectivity check; always answers with an empty object"""
        return {}

    # =============================================================================
    # Tools
    # =============================================================================

    def list_tools(self) -> ListToolsResult:
        self._require_ready("tools/list")
        return handle_tools_list(self.tool_registry)

    async def call_tool(
        self,
        params: Union[CallToolParams, Dict[str, Any], None],
        client_id: Optional[str] = None,
        request_id: RequestId = None,
    ) -> ToolCallResult:
        """
        Handle MCP tools/call request.

        Args:
            params: Tool name and arguments
            client_id: Caller identity supplied by the transport
            request_id: JSON-RPC id, used to route notifications/cancelled

        Returns:
            ToolCallResult; never raises for tool-level failures
        """
        self._require_ready("tools/call")
        return await handle_tools_call(
            self.tool_registry,
            self.request_manager,
            params,
            server_context=self._server_context(),
            client_id=client_id,
            request_id=request_id,
        )

    async def cancel(self, request_id: RequestId, reason: Optional[str] = None) -> Dict[str, Any]:
        """
        Handle notifications/cancelled.

        Unknown or already completed requests are ignored.
        """
        await self.request_manager.cancel_request(request_id, reason)
        return {}

    def _server_context(self) -> ServerContext:
        if self.host is None:
            return ServerContext()
        try:
            return self.host.server_context()
        except Exception as e:
            logger.warning(f"Could not read server context from host: {e}")
            return ServerContext()

    # =============================================================================
    # Resources
    # =============================================================================

    def list_resources(self) -> ListResourcesResult:
        self._require_ready("resources/list")
        return handle_resources_list(self.resource_registry)

    async def read_resource(
        self, params: Union[ReadResourceParams, Dict[str, Any], None]
    ) -> ResourceReadResult:
        """
        Handle resources/read request.

        Raises:
            ResourceNotFoundError: If the URI is not registered
            ResourceReadError: If the resource fails while reading
        """
        self._require_ready("resources/read")
        return await handle_resources_read(self.resource_registry, params)

    def subscribe(
        self, params: Union[ReadResourceParams, Dict[str, Any], None]
    ) -> Dict[str, Any]:
        self._require_ready("resources/subscribe")
        return handle_resources_subscribe(
            self.resource_registry, params, self._emit
        )

    def unsubscribe(
        self, params: Union[ReadResourceParams, Dict[str, Any], None]
    ) -> Dict[str, Any]:
        self._require_ready("resources/unsubscribe")
        return handle_resources_unsubscribe(
            self.resource_registry, params, self._emit
        )

    def notify_resource_updated(self, uri: str) -> None:
        """Tell subscribers of `uri` that its contents changed"""
        resource = resolve_resource(self.resource_registry, uri)
        resource.notify_subscribers(NotificationResponse.resource_updated(resource.uri))

    # =============================================================================
    # Logging
    # =============================================================================

    def set_level(self, level: str) -> Dict[str, Any]:
        """
        Handle logging/setLevel request.

        Args:
            level: MCP log level ("debug", "info", "warning", "error", ...)

        Raises:
            InvalidParamsError: For an unknown level
        """
        self._require_ready("logging/setLevel")
        python_level = LOG_LEVELS.get(str(level).lower())
        if python_level is None:
            raise InvalidParamsError(
                f"Unknown log level: {level}", data={"levels": list(LOG_LEVELS)}
            )

        logger.info(f"Setting log level to: {level}")
        logging.getLogger().setLevel(python_level)
        return {}

    # =============================================================================
    # Notifications
    # =============================================================================

    def add_notification_listener(self, listener: NotificationListener) -> None:
        """Receive list_changed and resource update notifications in-process"""
        with self._listeners_lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_notification_listener(self, listener: NotificationListener) -> None:
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def close(self) -> None:
        """Detach from the registries"""
        self.tool_registry.remove_listener(self._on_tools_changed)
        self.resource_registry.remove_listener(self._on_resources_changed)

    def _on_tools_changed(self) -> None:
        self._emit(NotificationResponse.tools_list_changed())

    def _on_resources_changed(self) -> None:
        self._emit(NotificationResponse.resources_list_changed())

    def _emit(self, notification: JSONRPCNotification) -> None:
        logger.debug(f"Notification: {notification.method}")
        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(notification)
            except Exception as e:
                logger.error(f"Notification listener failed: {e}", exc_info=True)
