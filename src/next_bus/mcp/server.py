"""MCP Server for next bus lookups.

This module implements a Model Context Protocol (MCP) server that exposes
NexTrip route resolution and next departure lookups as tools.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)

from .. import __version__
from ..core.client import NexTripClient
from ..core.exceptions import NextBusError
from ..core.finder import NextBusFinder, describe_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NextBusMCPServer:
    """MCP Server for next bus functionality."""

    def __init__(self, client: NexTripClient | None = None) -> None:
        """Initialize the Next Bus MCP Server."""
        self.server = Server("next-bus")
        self.client = client or NexTripClient()
        self.finder = NextBusFinder(self.client)
        # requests.Session is shared, so API calls run one at a time
        self._api_lock = asyncio.Lock()

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name="next_bus",
                    description="Minutes until the next bus for a route, stop and direction",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "route": {
                                "type": "string",
                                "description": "Exact route label (e.g. 'METRO Blue Line')",
                            },
                            "stop": {
                                "type": "string",
                                "description": "Part of the stop description, case-sensitive (e.g. 'Target Field')",
                            },
                            "direction": {
                                "type": "string",
                                "description": "Part of the direction name in lower case (e.g. 'north')",
                            },
                        },
                        "required": ["route", "stop", "direction"],
                    },
                ),
                Tool(
                    name="list_routes",
                    description="List all routes in the NexTrip route catalog",
                    inputSchema={"type": "object", "properties": {}},
                ),
                Tool(
                    name="list_directions",
                    description="List the directions served by a route",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "route_id": {
                                "type": "string",
                                "description": "Route identifier (from list_routes)",
                            }
                        },
                        "required": ["route_id"],
                    },
                ),
                Tool(
                    name="list_stops",
                    description="List the stops of a route in one direction",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "route_id": {
                                "type": "string",
                                "description": "Route identifier (from list_routes)",
                            },
                            "direction_id": {
                                "type": "integer",
                                "description": "Direction identifier (from list_directions)",
                            },
                        },
                        "required": ["route_id", "direction_id"],
                    },
                ),
            ]

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            try:
                if name == "next_bus":
                    return await self._next_bus(arguments)
                elif name == "list_routes":
                    return await self._list_routes(arguments)
                elif name == "list_directions":
                    return await self._list_directions(arguments)
                elif name == "list_stops":
                    return await self._list_stops(arguments)
                else:
                    return [TextContent(type="text", text=f"Unknown tool: {name}")]
            except Exception as e:
                logger.error(f"Error in tool {name}: {e}")
                return [TextContent(type="text", text=f"Error: {str(e)}")]

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking lookup in a worker thread, one at a time."""
        async with self._api_lock:
            return await asyncio.to_thread(func, *args)

    async def _next_bus(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Look up minutes until the next bus."""
        try:
            result = await self._run(
                self.finder.find,
                arguments["route"],
                arguments["stop"],
                arguments["direction"],
            )
        except NextBusError as e:
            return [TextContent(type="text", text=describe_error(e))]

        if result.departure is None:
            text = (
                f"No upcoming departures for {result.route.label} "
                f"{result.direction.name} at {result.stop.description}"
            )
        else:
            text = (
                f"**{result.summary}** until the next {result.route.label} "
                f"{result.direction.name} bus at {result.stop.description}"
            )

        return [
            TextContent(type="text", text=text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{json.dumps(result.model_dump(mode='json'), indent=2)}\n```",
            ),
        ]

    async def _list_routes(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List the route catalog."""
        try:
            routes = await self._run(self.client.get_routes)
        except NextBusError as e:
            return [TextContent(type="text", text=f"Error retrieving routes: {e}")]

        result_text = f"**Found {len(routes)} routes:**\n\n"
        for route in routes:
            result_text += f"• {route.label} (ID: {route.id})\n"
        return [TextContent(type="text", text=result_text)]

    async def _list_directions(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List the directions of a route."""
        route_id = arguments["route_id"]
        try:
            directions = await self._run(self.client.get_directions, route_id)
        except NextBusError as e:
            return [
                TextContent(type="text", text=f"Error retrieving directions: {e}")
            ]

        result_text = f"**Directions for route {route_id}:**\n\n"
        for direction in directions:
            result_text += f"• {direction.name} (ID: {direction.id})\n"
        return [TextContent(type="text", text=result_text)]

    async def _list_stops(self, arguments: dict[str, Any]) -> list[TextContent]:
        """List the stops of a route in one direction."""
        route_id = arguments["route_id"]
        direction_id = int(arguments["direction_id"])
        try:
            stops = await self._run(
                self.client.get_stops, route_id, direction_id
            )
        except NextBusError as e:
            return [TextContent(type="text", text=f"Error retrieving stops: {e}")]

        result_text = f"**Stops for route {route_id}, direction {direction_id}:**\n\n"
        for stop in stops:
            result_text += f"• {stop.description} (Code: {stop.code})\n"
        return [TextContent(type="text", text=result_text)]


async def main() -> None:
    """Main entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Next Bus MCP Server")

    server_instance = NextBusMCPServer()

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="next-bus",
                server_version=__version__,
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
