"""MCP (Model Context Protocol) server module for next bus lookups.

This module provides an MCP server implementation that exposes route,
direction, stop and next departure lookups through the Model Context Protocol.
"""

from .server import NextBusMCPServer, main

__all__ = ["NextBusMCPServer", "main"]
