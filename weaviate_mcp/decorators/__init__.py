"""
Decorators applied to MCP tool methods.

Typical stacking, outermost first::

    @measure_performance(slow_threshold=2.0)
    @handle_errors()
    @validate_input(schema=QueryInput)
    @mcp_tool("weaviate-query", "...")
    async def query(self, ...): ...
"""

from .error_handling import handle_errors
from .performance import measure_performance
from .tool import mcp_tool
from .validation import format_validation_error, validate_input

__all__ = [
    "format_validation_error",
    "handle_errors",
    "mcp_tool",
    "measure_performance",
    "validate_input",
]
