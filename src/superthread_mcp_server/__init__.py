"""Superthread MCP Server - Model Context Protocol server for Superthread."""

__version__ = "0.4.0"
