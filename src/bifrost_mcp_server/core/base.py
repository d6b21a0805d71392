"""
Base classes for the MCP server framework.

This module defines the tool abstraction:
- Tool: Abstract base class for all MCP tools

All tools must inherit from Tool and implement the execute() method.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Generic, Type

from .context import ExecutionContext
from .responses.tool import ToolResponse
from .types.mcp import ToolCallResult, ToolDescriptor
from .types.models import TParams


class Tool(ABC, Generic[TParams]):
    """
    Abstract base class for all MCP tools.

    Subclasses must define:
    - name: str - Tool name for MCP protocol
    - description: str - Human-readable description
    - params_model: Type[TParams] - Pydantic model for input validation
    - execute(params, ctx) - Main tool logic

    Instances are created once at startup and shared by every call, so any
    state a tool keeps must be synchronized by the tool itself.

    Example:
        ```python
        class EchoTool(Tool[EchoParams]):
            name = "echo"
            description = "Echo a message back"
            params_model = EchoParams

            async def execute(self, params: EchoParams, ctx: ExecutionContext):
                return self.success(params.message)
        ```
    """

    # Metadata (must be overridden by subclasses)
    name: str
    description: str
    params_model: Type[TParams]

    @abstractmethod
    async def execute(
        self, params: TParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        """
        Execute the tool logic.

        Args:
            params: Arguments validated against params_model
            ctx: Execution context for this call

        Returns:
            ToolCallResult; business failures are returned with isError set,
            unexpected faults may simply raise and are contained by the handler
        """

    @property
    def input_schema(self) -> dict:
        return self.get_input_schema()

    def get_input_schema(self) -> dict:
        """
        Generate JSON schema for tool input parameters.

        Generated from the pydantic params_model with nested definitions
        inlined, as advertised by tools/list.

        Returns:
            JSON schema dict compatible with MCP protocol
        """
        schema = self.params_model.model_json_schema(by_alias=True)
        schema = self._inline_schema_refs(schema)
        schema.setdefault("type", "object")
        schema.setdefault("properties", {})
        return schema

    def to_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.get_input_schema(),
        )

    # =============================================================================
    # Result helpers
    # =============================================================================

    @staticmethod
    def success(message: str) -> ToolCallResult:
        return ToolResponse.text_result(message)

    @staticmethod
    def error(message: str) -> ToolCallResult:
        return ToolResponse.error(message)

    @staticmethod
    def json_result(data: Any) -> ToolCallResult:
        return ToolResponse.json_result(data)

    @staticmethod
    def _inline_schema_refs(schema: dict) -> dict:
        """
        Inline all $ref references and remove $defs.

        Pydantic generates schemas with $defs and $ref for nested models;
        MCP clients handle inlined schemas more reliably.

        Args:
            schema: JSON schema with potential $defs and $ref

        Returns:
            Inlined JSON schema without $defs or $ref
        """
        schema = copy.deepcopy(schema)
        defs = schema.pop("$defs", {})

        def resolve_ref(obj):
            if isinstance(obj, dict):
                ref_path = obj.get("$ref")
                if ref_path and ref_path.startswith("#/$defs/"):
                    def_name = ref_path.split("/")[-1]
                    if def_name in defs:
                        resolved = resolve_ref(copy.deepcopy(defs[def_name]))
                        # Keep keys set next to the $ref (e.g. description)
                        for key, value in obj.items():
                            if key != "$ref":
                                resolved[key] = resolve_ref(value)
                        return resolved
                    return obj
                return {k: resolve_ref(v) for k, v in obj.items()}
            if isinstance(obj, list):
                return [resolve_ref(item) for item in obj]
            return obj

        return resolve_ref(schema)
