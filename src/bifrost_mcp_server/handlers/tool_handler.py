"""
MCP tools protocol handler.

Handles tools/list and tools/call against a ToolRegistry. Every tools/call
outcome other than malformed call parameters is returned in-band as a
ToolCallResult.
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..core import (
    ExecutionContext,
    InvalidParamsError,
    RequestManager,
    ServerContext,
    ToolCancelledError,
    ToolRegistry,
    ToolResponse,
)
from ..core.types import CallToolParams, ListToolsResult, RequestId, ToolCallResult

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "mcp-client"


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into `field: message; ...`"""
    errors = []
    for detail in error.errors():
        field = ".".join(str(x) for x in detail["loc"]) or "arguments"
        errors.append(f"{field}: {detail['msg']}")
    return "; ".join(errors)


def handle_tools_list(registry: ToolRegistry) -> ListToolsResult:
    """
    Handle MCP tools/list request.

    Returns:
        ListToolsResult with one descriptor per registered tool
    """
    result = registry.get_mcp_tools_list()
    logger.debug(f"Returning {len(result.tools)} tools")
    return result


def parse_call_params(params: Union[CallToolParams, Dict[str, Any], None]) -> CallToolParams:
    if isinstance(params, CallToolParams):
        return params
    try:
        return CallToolParams.model_validate(params or {})
    except ValidationError as e:
        raise InvalidParamsError(
            f"Invalid tools/call parameters: {format_validation_error(e)}"
        ) from e


async def handle_tools_call(
    registry: ToolRegistry,
    request_manager: RequestManager,
    params: Union[CallToolParams, Dict[str, Any], None],
    server_context: Optional[ServerContext] = None,
    client_id: Optional[str] = None,
    request_id: RequestId = None,
) -> ToolCallResult:
    """
    Handle MCP tools/call request.

    Flow:
    1. Look up tool in registry
    2. Validate arguments using the tool's pydantic model
    3. Create ExecutionContext and track the call for cancellation
    4. Execute tool, containing any fault

    Args:
        registry: Registry to resolve the tool name in
        request_manager: Tracker of in-flight calls
        params: tools/call parameters (name, arguments)
        server_context: Host facts for the execution context
        client_id: Caller identity supplied by the transport
        request_id: JSON-RPC id of the call

    Returns:
        ToolCallResult; isError is set for unknown tools, invalid arguments,
        cancellation and execution faults
    """
    call = parse_call_params(params)

    # =============================================================================
    # 1. Tool Discovery
    # =============================================================================

    tool = registry.get(call.name)
    if tool is None:
        logger.warning(f"Tool not found: {call.name}")
        return ToolResponse.not_found(call.name)

    # =============================================================================
    # 2. Parameter Validation
    # =============================================================================

    try:
        validated_params = tool.params_model.model_validate(call.arguments)
    except ValidationError as e:
        error_message = f"Validation failed: {format_validation_error(e)}"
        logger.warning(f"Validation error for {call.name}: {error_message}")
        return ToolResponse.error(error_message)
    except Exception as e:
        logger.error(f"Parameter model of {call.name} failed: {e}", exc_info=True)
        return ToolResponse.error(f"Validation failed: {e}")

    # =============================================================================
    # 3. Execution Context
    # =============================================================================

    ctx = ExecutionContext(
        client_id=client_id or DEFAULT_CLIENT_ID,
        request_id=request_id,
        server_context=server_context or ServerContext(),
    )
    await request_manager.register_request(request_id, ctx.cancellation)

    # =============================================================================
    # 4. Execute Tool
    # =============================================================================

    logger.info(f"Executing tool: {call.name}")
    try:
        result = await tool.execute(validated_params, ctx)
        if not isinstance(result, ToolCallResult):
            logger.error(
                f"Tool '{call.name}' returned {type(result).__name__} instead of ToolCallResult"
            )
            return ToolResponse.error(f"Tool '{call.name}' returned an invalid result")

    except ToolCancelledError as e:
        logger.info(f"Tool execution cancelled: {call.name} (request {request_id}) - {e}")
        return ToolResponse.error(f"Tool '{call.name}' cancelled: {e}")

    except Exception as e:
        logger.error(f"Tool execution error in {call.name}: {e}", exc_info=True)
        return ToolResponse.execution_error(call.name, e)

    finally:
        await request_manager.cleanup_request(request_id)

    logger.info(f"Tool '{call.name}' completed in {ctx.get_duration():.2f}s")
    return result
