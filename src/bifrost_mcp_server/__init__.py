"""
Bifrost MCP Server

Model Context Protocol server exposing a host application's state to AI
agents through tools and app:// resources.
"""

__version__ = "2.0.0"
