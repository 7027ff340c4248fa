"""
Input validation models for the MCP tools.

Each tool runs its arguments through one of these models before touching
Weaviate, so malformed calls fail fast with a readable message.
"""

from pydantic import BaseModel, Field, field_validator

MAX_LIMIT = 50


def _clean_names(values: list[str]) -> list[str]:
    cleaned = [v.strip() for v in values]
    if any(not v for v in cleaned):
        raise ValueError("Property names cannot be empty")
    return cleaned


class QueryInput(BaseModel):
    """Input validation schema for weaviate-query and weaviate-generate-text."""

    query: str = Field(
        min_length=1,
        description="Free-text query used for hybrid search",
    )
    collection: str | None = Field(
        default=None,
        min_length=1,
        description="Collection to query; first available collection when omitted",
    )
    target_properties: list[str] = Field(
        min_length=1,
        description="Properties to return for each matching object",
    )
    limit: int | None = Field(
        default=None,
        ge=1,
        le=MAX_LIMIT,
        description="Maximum number of objects to return",
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v):
        """Validate query text."""
        v = v.strip()
        if not v:
            raise ValueError("Query cannot be empty")
        return v

    @field_validator("target_properties")
    @classmethod
    def validate_target_properties(cls, v):
        return _clean_names(v)


class TraversalInput(QueryInput):
    """Input validation schema for weaviate-query-with-refs."""

    ref_property: str = Field(
        min_length=1,
        description="Reference property to follow from each match",
    )
    ref_properties: list[str] = Field(
        min_length=1,
        description="Properties to return for each referenced object",
    )

    @field_validator("ref_property")
    @classmethod
    def validate_ref_property(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Reference property cannot be empty")
        return v

    @field_validator("ref_properties")
    @classmethod
    def validate_ref_properties(cls, v):
        return _clean_names(v)


class OriginInput(BaseModel):
    """Input validation schema for weaviate-query-origin."""

    query: str = Field(min_length=1, description="Free-text query")
    collection: str | None = Field(default=None, min_length=1)
    base_properties: list[str] | None = Field(
        default=None,
        min_length=1,
        description="Properties of the base collection to return",
    )
    limit: int | None = Field(default=None, ge=1, le=MAX_LIMIT)

    @field_validator("query")
    @classmethod
    def validate_query(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Query cannot be empty")
        return v

    @field_validator("base_properties")
    @classmethod
    def validate_base_properties(cls, v):
        return None if v is None else _clean_names(v)
