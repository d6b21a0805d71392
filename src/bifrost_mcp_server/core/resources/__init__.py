"""Resource contract and registry"""

from .base import APP_SCHEME, Resource, base_uri, parse_app_uri
from .registry import ResourceRegistry

__all__ = [
    "APP_SCHEME",
    "Resource",
    "ResourceRegistry",
    "base_uri",
    "parse_app_uri",
]
