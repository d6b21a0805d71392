"""
Bifrost MCP Server Environment Configuration

Handles loading environment variables from .env.bifrost file or system environment.
Supports both local development and isolated deployment environments.
"""

import os
import sys
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

ENV_VALUES = {}

# Containers and CI provide configuration through the process environment only
is_isolated_environment = (
    os.environ.get("IS_ISOLATED_ENVIRONMENT", "false").lower() == "true"
)

if not is_isolated_environment:
    env_bifrost_path = Path(__file__).parent.parent.parent / ".env.bifrost"

    if env_bifrost_path.exists():
        load_dotenv(env_bifrost_path)
        ENV_VALUES = dotenv_values(env_bifrost_path)
    else:
        cwd_env_path = Path.cwd() / ".env.bifrost"
        if cwd_env_path.exists():
            load_dotenv(cwd_env_path)
            ENV_VALUES = dotenv_values(cwd_env_path)
        else:
            print(
                "WARNING: .env.bifrost file not found. "
                "Bifrost MCP server will use system environment variables only. "
                f"Searched locations:\n  - {env_bifrost_path}\n  - {cwd_env_path}",
                file=sys.stderr,
            )
            ENV_VALUES = {}

# Transport
ENV_VALUES["MCP_SERVER_HOST"] = os.getenv("MCP_SERVER_HOST", "0.0.0.0")
ENV_VALUES["MCP_SERVER_PORT"] = os.getenv("MCP_SERVER_PORT", "8090")
ENV_VALUES["MCP_LOG_LEVEL"] = os.getenv("MCP_LOG_LEVEL", "info")

# Protocol behaviour
# Strict mode rejects requests other than initialize/ping before the handshake
ENV_VALUES["MCP_STRICT_HANDSHAKE"] = os.getenv("MCP_STRICT_HANDSHAKE", "false")
ENV_VALUES["MCP_LOAD_PLUGINS"] = os.getenv("MCP_LOAD_PLUGINS", "true")

# Console log capture
ENV_VALUES["LOG_BUFFER_CAPACITY"] = os.getenv("LOG_BUFFER_CAPACITY", "1000")
ENV_VALUES["LOG_READ_LIMIT"] = os.getenv("LOG_READ_LIMIT", "100")

# Resource limits
ENV_VALUES["HIERARCHY_MAX_DEPTH"] = os.getenv("HIERARCHY_MAX_DEPTH", "5")
ENV_VALUES["ASSET_LIST_LIMIT"] = os.getenv("ASSET_LIST_LIMIT", "100")

# In-memory host
ENV_VALUES["PROJECT_NAME"] = os.getenv("PROJECT_NAME", "Bifrost Project")


def get_env(key: str, default: str = "") -> str:
    """
    Get environment variable value.

    Args:
        key: Environment variable key
        default: Default value if key not found

    Returns:
        Environment variable value or default
    """
    return ENV_VALUES.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean ("true", "1", "yes", "on")"""
    value = ENV_VALUES.get(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def get_env_int(key: str, default: int = 0) -> int:
    """
    Get environment variable as integer.

    Args:
        key: Environment variable key
        default: Default value if key not found or not an integer

    Returns:
        Integer value
    """
    try:
        return int(ENV_VALUES.get(key, default))
    except (ValueError, TypeError):
        return default
