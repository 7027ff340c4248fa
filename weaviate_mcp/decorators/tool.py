"""Marker decorator for methods exposed as MCP tools."""


def mcp_tool(name: str, description: str):
    """Mark a method as an MCP tool.

    The tools provider registers every public method carrying the marker,
    under ``name`` and with ``description`` as the tool description.
    """

    def decorator(func):
        func._mcp_tool = True
        func._mcp_name = name
        func._mcp_description = description
        return func

    return decorator
