"""CLI interface for Weaviate MCP Server."""

import logging
from pathlib import Path
from typing import Literal, cast

import click
from dotenv import load_dotenv

from weaviate_mcp import __version__
from weaviate_mcp.server import Server
from weaviate_mcp.settings import VALID_LOG_OUTPUTS, VALID_SCHEMES, Settings, parse_list

# Load environment variables from .env file
load_dotenv(override=True)

logger = logging.getLogger(__name__)

LOG_FILE = Path("logs") / "mcp-server.log"
LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def _print_version(
    ctx: click.Context, param: click.Parameter, value: bool
) -> None:  # pragma: no cover - simple utility
    """Callback to print only the raw version and exit early."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(__version__)
    ctx.exit()


def configure_logging(log_level: str, log_output: str, log_file: Path = LOG_FILE):
    """Apply the level to the root logger and route output.

    ``stderr`` keeps the stream handler, ``file`` replaces it with a file
    handler and ``both`` keeps the stream handler and adds the file handler.
    stdout is never used: it carries the stdio transport.
    """
    level = getattr(logging, log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if log_output in ("file", "both"):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        if log_output == "file":
            for handler in list(root_logger.handlers):
                if type(handler) is logging.StreamHandler:
                    root_logger.removeHandler(handler)
        root_logger.addHandler(file_handler)

    for handler in root_logger.handlers:
        handler.setLevel(level)


@click.command()
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the weaviate-mcp version and exit (raw version only).",
)
@click.option(
    "--weaviate-host",
    envvar="WEAVIATE_HOST",
    default=None,
    help="Weaviate host and port (env: WEAVIATE_HOST) (default: host.docker.internal:8080)",
)
@click.option(
    "--weaviate-scheme",
    envvar="WEAVIATE_SCHEME",
    default=None,
    type=click.Choice(VALID_SCHEMES),
    help="Weaviate URL scheme (env: WEAVIATE_SCHEME) (default: http)",
)
@click.option(
    "--weaviate-api-key",
    envvar="WEAVIATE_API_KEY",
    default=None,
    help="Weaviate API key sent as a bearer token (env: WEAVIATE_API_KEY)",
)
@click.option(
    "--transport",
    envvar="TRANSPORT",
    default="stdio",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="Transport protocol (env: TRANSPORT) (stdio, sse, or streamable-http)",
)
@click.option(
    "--host",
    envvar="HOST",
    default="127.0.0.1",
    help="Host to bind (env: HOST) for sse and streamable-http transports",
)
@click.option(
    "--port",
    envvar="PORT",
    default=8000,
    type=int,
    help="Port to bind (env: PORT) for sse and streamable-http transports",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set the logging level",
)
@click.option(
    "--log-output",
    envvar="MCP_LOG_OUTPUT",
    default="stderr",
    type=click.Choice(VALID_LOG_OUTPUTS),
    help=f"Where to write logs (env: MCP_LOG_OUTPUT); file output goes to {LOG_FILE}",
)
@click.option(
    "--read-only",
    is_flag=True,
    default=False,
    help="Mark the server as read-only (env: MCP_READ_ONLY)",
)
@click.option(
    "--disabled-tools",
    envvar="MCP_DISABLED_TOOLS",
    default=None,
    help="Comma-separated tool names not to register (env: MCP_DISABLED_TOOLS)",
)
def main(
    weaviate_host: str | None,
    weaviate_scheme: str | None,
    weaviate_api_key: str | None,
    transport: str,
    host: str,
    port: int,
    log_level: str,
    log_output: str,
    read_only: bool,
    disabled_tools: str | None,
) -> None:
    """Run the Weaviate MCP server with configurable transport options.

    Examples:
        # Run over stdio (for MCP clients)
        weaviate-mcp

        # Point at a remote Weaviate over https
        weaviate-mcp --weaviate-host weaviate.example.org --weaviate-scheme https

        # Run with streamable-http transport on a custom port
        weaviate-mcp --transport streamable-http --host 0.0.0.0 --port 9000

        # Run with debug logging written to logs/mcp-server.log
        weaviate-mcp --log-level DEBUG --log-output file
    """
    configure_logging(log_level, log_output)
    logger.debug("Set logging level to %s", log_level)

    try:
        settings = Settings()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if weaviate_host:
        settings.weaviate_host = weaviate_host
    if weaviate_scheme:
        settings.weaviate_scheme = weaviate_scheme
    if weaviate_api_key:
        settings.weaviate_api_key = weaviate_api_key
    if read_only:
        settings.read_only = True
    if disabled_tools is not None:
        settings.disabled_tools = parse_list(disabled_tools)
    settings.log_output = log_output

    try:
        settings.validate()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    logger.info("Weaviate endpoint: %s", settings.base_url)
    if settings.disabled_tools:
        logger.info("Disabled tools: %s", ", ".join(settings.disabled_tools))

    match transport:
        case "stdio":
            logger.debug("Using STDIO transport")
        case _:
            logger.info("Using %s transport on %s:%s", transport, host, port)

    server = Server(settings=settings)
    server.run(
        transport=cast(Literal["stdio", "sse", "streamable-http"], transport),
        host=host,
        port=port,
    )


if __name__ == "__main__":
    main()
