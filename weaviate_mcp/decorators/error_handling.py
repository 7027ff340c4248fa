"""
Error handling decorator for tool methods.

Every failure inside a tool is reported to the MCP client as one tool error
with a human-readable message. Nothing else leaves the tool.
"""

import functools
import logging

from fastmcp.exceptions import ToolError

from weaviate_mcp.exceptions import WeaviateMcpError

logger = logging.getLogger(__name__)


def handle_errors():
    """Convert exceptions raised by the wrapped coroutine into ``ToolError``."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ToolError:
                raise
            except WeaviateMcpError as e:
                logger.error("Tool %s failed: %s", func.__name__, e)
                raise ToolError(str(e)) from e
            except Exception as e:
                logger.exception("Unexpected error in tool %s", func.__name__)
                raise ToolError(f"Unexpected error: {e}") from e

        return wrapper

    return decorator
