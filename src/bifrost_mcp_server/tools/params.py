"""Parameter models shared by several built-in tools"""

from pydantic import Field

from ..core.types.models import MCPModel
from ..host import Vector3


class Vector3Param(MCPModel):
    """Three-component vector; omitted components default to 0"""

    x: float = Field(default=0.0, description="X component")
    y: float = Field(default=0.0, description="Y component")
    z: float = Field(default=0.0, description="Z component")

    def to_vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


def optional_vector(value):
    """Host vector for an optional parameter, None when it was omitted"""
    return value.to_vector() if value is not None else None
