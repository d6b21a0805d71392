"""
MCP resources protocol handler.

Handles resource protocol methods against a ResourceRegistry:
- resources/list: List registered resources
- resources/read: Read a resource snapshot
- resources/subscribe, resources/unsubscribe: Validate and (un)register
  an update callback
"""

import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..core import (
    InvalidParamsError,
    MCPError,
    Resource,
    ResourceNotFoundError,
    ResourceReadError,
    ResourceRegistry,
)
from ..core.resources.base import ResourceSubscriber
from ..core.types import ListResourcesResult, ReadResourceParams, ResourceReadResult
from .tool_handler import format_validation_error

logger = logging.getLogger(__name__)


def parse_read_params(
    params: Union[ReadResourceParams, Dict[str, Any], None]
) -> ReadResourceParams:
    if isinstance(params, ReadResourceParams):
        return params
    try:
        return ReadResourceParams.model_validate(params or {})
    except ValidationError as e:
        raise InvalidParamsError(
            f"Invalid resource parameters: {format_validation_error(e)}"
        ) from e


def resolve_resource(registry: ResourceRegistry, uri: str) -> Resource:
    """
    Find the resource addressed by `uri`.

    Raises:
        ResourceNotFoundError: If no registered resource matches
    """
    resource = registry.resolve(uri)
    if resource is None:
        logger.warning(f"Resource not found: {uri}")
        raise ResourceNotFoundError(uri)
    return resource


def handle_resources_list(registry: ResourceRegistry) -> ListResourcesResult:
    """
    Handle resources/list request.

    Returns:
        ListResourcesResult with available resources
    """
    result = registry.get_mcp_resources_list()
    logger.debug(f"Returning {len(result.resources)} resources")
    return result


async def handle_resources_read(
    registry: ResourceRegistry,
    params: Union[ReadResourceParams, Dict[str, Any], None],
) -> ResourceReadResult:
    """
    Handle resources/read request.

    The raw URI, query suffix included, is passed through to the resource.

    Args:
        registry: Registry to resolve the URI in
        params: Read parameters carrying the requested URI

    Returns:
        ResourceReadResult produced by the resource

    Raises:
        ResourceNotFoundError: If the URI is not registered
        ResourceReadError: If the resource fails while reading
    """
    read_params = parse_read_params(params)
    resource = resolve_resource(registry, read_params.uri)

    try:
        result = await resource.read(read_params)
    except MCPError:
        raise
    except Exception as e:
        logger.error(f"Error reading resource {read_params.uri}: {e}", exc_info=True)
        raise ResourceReadError(
            f"Failed to read resource {read_params.uri}: {e}",
            data={"uri": read_params.uri},
        ) from e

    if not isinstance(result, ResourceReadResult):
        logger.error(
            f"Resource {resource.uri} returned {type(result).__name__} "
            "instead of ResourceReadResult"
        )
        raise ResourceReadError(
            f"Resource {read_params.uri} returned an invalid result",
            data={"uri": read_params.uri},
        )

    logger.debug(f"Read resource: {read_params.uri}")
    return result


def handle_resources_subscribe(
    registry: ResourceRegistry,
    params: Union[ReadResourceParams, Dict[str, Any], None],
    callback: ResourceSubscriber,
) -> Dict[str, Any]:
    """
    Handle resources/subscribe request.

    Returns:
        Empty dict (subscription confirmation)

    Raises:
        ResourceNotFoundError: If the URI is not registered
    """
    subscribe_params = parse_read_params(params)
    resource = resolve_resource(registry, subscribe_params.uri)
    resource.subscribe(callback)
    logger.info(f"Subscribed to resource: {resource.uri}")
    return {}


def handle_resources_unsubscribe(
    registry: ResourceRegistry,
    params: Union[ReadResourceParams, Dict[str, Any], None],
    callback: ResourceSubscriber,
) -> Dict[str, Any]:
    """
    Handle resources/unsubscribe request.

    Returns:
        Empty dict (unsubscription confirmation)

    Raises:
        ResourceNotFoundError: If the URI is not registered
    """
    unsubscribe_params = parse_read_params(params)
    resource = resolve_resource(registry, unsubscribe_params.uri)
    resource.unsubscribe(callback)
    logger.info(f"Unsubscribed from resource: {resource.uri}")
    return {}
