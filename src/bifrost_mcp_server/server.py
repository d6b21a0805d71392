#!/usr/bin/env python3
"""
Bifrost MCP Server - Model Context Protocol Implementation

Exposes the host application's scene, selection, build configuration,
asset index and console log over JSON-RPC 2.0 at POST /mcp.
"""

import datetime
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from bifrost_mcp_server.core import (
    ErrorCodes,
    LogBuffer,
    MCPError,
    MethodNotFoundError,
    ResourceRegistry,
    Response,
    ToolRegistry,
)
from bifrost_mcp_server.core.plugins import register_plugins
from bifrost_mcp_server.core.responses.base import PARSE_ERRORS
from bifrost_mcp_server.core.types import JSONRPCRequest
from bifrost_mcp_server.env import get_env, get_env_bool, get_env_int
from bifrost_mcp_server.handlers import SERVER_NAME, SERVER_VERSION, ProtocolHandler
from bifrost_mcp_server.handlers.tool_handler import format_validation_error
from bifrost_mcp_server.host import HostApplication, InMemoryHost
from bifrost_mcp_server.resources import create_builtin_resources
from bifrost_mcp_server.tools import create_builtin_tools
from bifrost_mcp_server.utils import to_wire

# Configure logging
logging.basicConfig(
    level=get_env("MCP_LOG_LEVEL", "info").upper(),
    format="%(levelname)-5s | %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce uvicorn access log noise (only show warnings/errors)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# =============================================================================
# Helper Functions
# =============================================================================


def success_response(request_id, result, status_code=200):
    """Helper to create success JSON response"""
    payload = to_wire(Response.success(request_id, to_wire(result)))
    payload.setdefault("id", None)
    payload.setdefault("result", {})
    return JSONResponse(content=payload, status_code=status_code)


def error_response(request_id, error_code: int, message: str, data=None, status_code=200):
    """Helper to create error JSON response"""
    return _reply(Response.error(request_id, error_code, message, to_wire(data)), status_code)


def exception_response(request_id, exc: BaseException, status_code=200):
    """Helper to turn a request failure into a JSON-RPC error response"""
    return _reply(Response.for_exception(request_id, exc), status_code)


def _reply(response, status_code):
    payload = to_wire(response)
    payload.setdefault("id", None)
    return JSONResponse(content=payload, status_code=status_code)


def _raw_request_id(data):
    """Id of an unparsable request, when it has a usable one"""
    request_id = data.get("id") if isinstance(data, dict) else None
    return request_id if isinstance(request_id, (str, int)) else None


# =============================================================================
# Method Routing
# =============================================================================


async def dispatch(
    handler: ProtocolHandler, mcp_request: JSONRPCRequest, client_id: Optional[str]
):
    """
    Route one JSON-RPC request to the protocol handler.

    Returns:
        Tuple of (result, HTTP status code)

    Raises:
        MCPError: Protocol-level failures, reported with their own code
    """
    method = mcp_request.method
    params = mcp_request.params or {}

    # Lifecycle
    if method == "initialize":
        return await handler.initialize(params), 200

    if method == "ping":
        return handler.ping(), 200

    # Notifications
    if method == "notifications/initialized":
        return handler.initialized(), 202

    if method == "notifications/cancelled":
        request_id = params.get("requestId", params.get("request_id"))
        return await handler.cancel(request_id, params.get("reason")), 202

    # Logging
    if method == "logging/setLevel":
        return handler.set_level(params.get("level", "info")), 200

    # Tools
    if method == "tools/list":
        return handler.list_tools(), 200

    if method == "tools/call":
        result = await handler.call_tool(
            params, client_id=client_id, request_id=mcp_request.id
        )
        return result, 200

    # Resources
    if method == "resources/list":
        return handler.list_resources(), 200

    if method == "resources/read":
        return await handler.read_resource(params), 200

    if method == "resources/subscribe":
        return handler.subscribe(params), 200

    if method == "resources/unsubscribe":
        return handler.unsubscribe(params), 200

    raise MethodNotFoundError(f"Method not found: {method}", data={"method": method})


# =============================================================================
# Application Setup
# =============================================================================


def create_app(
    host: Optional[HostApplication] = None,
    strict_handshake: Optional[bool] = None,
    load_plugins: Optional[bool] = None,
    capture_logs: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Configuration not passed explicitly is read from the environment
    (see env.py). Everything stateful is created in the lifespan and kept
    on `app.state`, so separate apps never share state.

    Args:
        host: Host application to expose (an InMemoryHost by default)
        strict_handshake: Reject requests before initialize
        load_plugins: Register tools/resources from installed entry points
        capture_logs: Attach the console-log buffer to the root logger

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown logic for the Bifrost MCP server"""
        logger.info("Starting Bifrost MCP Server...")

        app_host = host or InMemoryHost(project_name=get_env("PROJECT_NAME", "Bifrost Project"))

        log_buffer = LogBuffer(capacity=get_env_int("LOG_BUFFER_CAPACITY", 1000))
        handler = None
        app.state.log_buffer = log_buffer
        if capture_logs:
            log_buffer.attach()

        try:
            tool_registry = ToolRegistry()
            resource_registry = ResourceRegistry()

            for tool in create_builtin_tools(app_host):
                tool_registry.register(tool)
            for resource in create_builtin_resources(
                app_host,
                log_buffer,
                max_depth=get_env_int("HIERARCHY_MAX_DEPTH", 5),
                asset_limit=get_env_int("ASSET_LIST_LIMIT", 100),
                log_read_limit=get_env_int("LOG_READ_LIMIT", 100),
            ):
                resource_registry.register(resource)

            plugins_enabled = (
                get_env_bool("MCP_LOAD_PLUGINS", True) if load_plugins is None else load_plugins
            )
            if plugins_enabled:
                loaded = register_plugins(app_host, tool_registry, resource_registry)
                if loaded:
                    logger.info(f"Loaded {loaded} plugin capabilities")

            strict = (
                get_env_bool("MCP_STRICT_HANDSHAKE", False)
                if strict_handshake is None
                else strict_handshake
            )
            handler = ProtocolHandler(
                tool_registry, resource_registry, host=app_host, strict_handshake=strict
            )

            app.state.host = app_host
            app.state.tool_registry = tool_registry
            app.state.resource_registry = resource_registry
            app.state.handler = handler

            logger.info(f"✅ Registered {len(tool_registry)} tools:")
            for tool in tool_registry.get_all():
                logger.info(f"   - {tool.name}: {tool.description[:60]}")
            logger.info(f"✅ Registered {len(resource_registry)} resources")

            yield
        finally:
            # Shutdown
            logger.info("Shutting down...")
            if handler is not None:
                handler.close()
            log_buffer.detach()

    app = FastAPI(
        title=SERVER_NAME,
        version=SERVER_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/mcp")
    async def handle_mcp_request(request: Request):
        """Main MCP endpoint - handles all JSON-RPC 2.0 requests"""
        mcp_request = None
        try:
            body = await request.body()
            logger.debug(f"Request body: {body.decode('utf-8', errors='replace')}")
            data = json.loads(body)

            try:
                mcp_request = JSONRPCRequest.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Invalid JSON-RPC request: {e}")
                return error_response(
                    _raw_request_id(data),
                    ErrorCodes.INVALID_REQUEST,
                    f"Invalid Request: {format_validation_error(e)}",
                )

            # Log request (tools/call at INFO, others at DEBUG)
            log_level = logging.INFO if mcp_request.method == "tools/call" else logging.DEBUG
            logger.log(log_level, f"MCP request: {mcp_request.method}")

            result, status_code = await dispatch(
                request.app.state.handler,
                mcp_request,
                request.headers.get("x-client-id"),
            )
            return success_response(mcp_request.id, result, status_code=status_code)

        except PARSE_ERRORS as e:
            logger.error(f"Invalid JSON: {e}")
            return exception_response(None, e)

        except MCPError as e:
            logger.warning(f"MCP error {e.code}: {e.message}")
            return exception_response(getattr(mcp_request, "id", None), e)

        except Exception as e:
            logger.error(f"Request handling error: {e}", exc_info=True)
            return exception_response(getattr(mcp_request, "id", None), e)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }

    @app.get("/")
    async def root():
        """Server information endpoint"""
        return {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "mcp_endpoint": "/mcp",
            "health_endpoint": "/health",
            "transport": "http",
            "description": "MCP server exposing host application state to AI agents",
        }

    return app


app = create_app()


# =============================================================================
# Application Entry Point
# =============================================================================


if __name__ == "__main__":
    from bifrost_mcp_server.cli import main

    main()
