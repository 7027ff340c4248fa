"""
Weaviate MCP Server Module Entry Point

Usage:
    python -m weaviate_mcp [OPTIONS]

Examples:
    # Run over stdio
    python -m weaviate_mcp

    # Show all CLI options
    python -m weaviate_mcp --help

    # Run HTTP server for API access
    python -m weaviate_mcp --transport streamable-http --host 0.0.0.0 --port 9000
"""

from weaviate_mcp.cli import main

if __name__ == "__main__":
    main()
