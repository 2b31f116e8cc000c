"""MCP server for zdoc."""

import asyncio
import json

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import load_settings
from .errors import ZdocError
from .logging import configure_logging
from .tools.search_docs import list_sources, search_docs


# Create server
server = Server("zdoc")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="search_docs",
            description="Search Zig source code for public declarations matching an identifier. Returns their signatures and doc comments with bodies and private members left out.",
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "A .zig file, a directory searched recursively, or a std module path such as 'std.fmt'"
                    },
                    "identifier": {
                        "type": "string",
                        "description": "Identifier to look up (case-insensitive). Omit to list all public declarations with the file doc comment."
                    },
                    "substring": {
                        "type": "boolean",
                        "description": "Match any identifier containing the given text",
                        "default": False
                    },
                    "doc_only": {
                        "type": "boolean",
                        "description": "Return only the file-level doc comments",
                        "default": False
                    }
                },
                "required": ["source"]
            }
        ),
        Tool(
            name="list_sources",
            description="List the .zig files a source location resolves to.",
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {
                        "type": "string",
                        "description": "A .zig file, a directory, or a std module path such as 'std.fmt'"
                    }
                },
                "required": ["source"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        settings = load_settings()
        if name == "search_docs":
            result = search_docs(
                source=arguments["source"],
                identifier=arguments.get("identifier"),
                substring=arguments.get("substring", False),
                doc_only=arguments.get("doc_only", False),
                settings=settings,
            )
        elif name == "list_sources":
            result = list_sources(
                source=arguments["source"],
                settings=settings,
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (ZdocError, KeyError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    configure_logging(level=load_settings().log_level)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
