"""Runtime settings for the Weaviate MCP server.

Values come from environment variables (a ``.env`` file is loaded by the CLI
before settings are created) and may be overridden afterwards by command-line
options.
"""

import os

VALID_SCHEMES = ("http", "https")
VALID_LOG_OUTPUTS = ("stderr", "file", "both")


def _parse_bool(value: str | bool | None) -> bool:
    """Parse a boolean value from string or bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in ("true", "1", "yes")


def parse_list(value: str | None) -> list[str]:
    """Parse a comma-separated list, dropping empty entries."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Connection, cache and tool settings."""

    def __init__(self):
        # Weaviate connection
        self.weaviate_host: str = os.getenv(
            "WEAVIATE_HOST", "host.docker.internal:8080"
        )
        self.weaviate_scheme: str = os.getenv("WEAVIATE_SCHEME", "http")
        self.weaviate_api_key: str | None = os.getenv("WEAVIATE_API_KEY") or None
        self.timeout: int = int(os.getenv("WEAVIATE_TIMEOUT", "30"))

        # Query behaviour
        self.schema_cache_ttl: float = float(os.getenv("SCHEMA_CACHE_TTL", "60"))
        self.default_limit: int = int(os.getenv("DEFAULT_QUERY_LIMIT", "3"))

        # Tool exposure
        self.disabled_tools: list[str] = parse_list(os.getenv("MCP_DISABLED_TOOLS"))
        self.read_only: bool = _parse_bool(os.getenv("MCP_READ_ONLY"))

        # Logging sink
        self.log_output: str = os.getenv("MCP_LOG_OUTPUT", "stderr")

        self.validate()

    @property
    def base_url(self) -> str:
        """Base URL of the Weaviate REST API."""
        return f"{self.weaviate_scheme}://{self.weaviate_host}"

    def validate(self) -> None:
        """Reject values the server cannot run with.

        Raises:
            ValueError: If the scheme or log output is not supported.
        """
        if self.weaviate_scheme not in VALID_SCHEMES:
            raise ValueError(f"Invalid Weaviate scheme: {self.weaviate_scheme}")
        if self.log_output not in VALID_LOG_OUTPUTS:
            raise ValueError(f"Invalid log output: {self.log_output}")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def is_tool_disabled(self, tool_name: str) -> bool:
        """Check whether a tool was switched off through configuration."""
        return tool_name in self.disabled_tools
