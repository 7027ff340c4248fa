"""
Input validation decorator.

Checks tool arguments against a pydantic model before the tool body runs and
passes the validated (normalized) values on to the wrapped function.
"""

import functools
import inspect
import logging

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from weaviate_mcp.exceptions import ValidationError

logger = logging.getLogger(__name__)


def format_validation_error(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "input"
        parts.append(f"{location}: {item['msg']}")
    return "Invalid input: " + "; ".join(parts)


def validate_input(schema: type[BaseModel]):
    """Validate keyword and positional arguments against ``schema``.

    Only arguments named in the schema are checked; ``self`` and context
    parameters pass through untouched.

    Raises:
        ValidationError: If the arguments do not satisfy the schema.
    """

    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            bound = signature.bind_partial(*args, **kwargs)
            data = {
                key: value
                for key, value in bound.arguments.items()
                if key in schema.model_fields
            }
            try:
                validated = schema(**data)
            except PydanticValidationError as e:
                message = format_validation_error(e)
                logger.warning("%s rejected input: %s", func.__name__, message)
                raise ValidationError(message) from e

            for key in data:
                bound.arguments[key] = getattr(validated, key)
            return await func(*bound.args, **bound.kwargs)

        return wrapper

    return decorator
