"""MCP application instance.

This module exists to avoid circular import issues when running with `python -m`.
All tool modules should import `mcp` from here, not from server.py.
"""

from mcp.server.fastmcp import FastMCP

mcp = FastMCP(
    "Journey Link",
    instructions=(
        "Find public transit stops for a start address and build a journey planner "
        "link to the fixed destination"
    ),
)
