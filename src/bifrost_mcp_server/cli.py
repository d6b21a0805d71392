"""
Bifrost MCP Server CLI entry point.
"""

import uvicorn

from .env import get_env, get_env_int
from .server import app


def main():
    """Main CLI entry point - starts the Bifrost MCP Server"""
    host = get_env("MCP_SERVER_HOST", "0.0.0.0")
    port = get_env_int("MCP_SERVER_PORT", 8090)

    print("\n" + "─" * 60)
    print(f"  Bifrost MCP Server v2.0 | http://{host}:{port}/mcp")
    print("  Scene, selection, build and asset access for AI agents")
    print("─" * 60 + "\n")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=get_env("MCP_LOG_LEVEL", "info").lower(),
        timeout_keep_alive=30 * 60,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    main()
