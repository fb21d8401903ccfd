"""Interfaces: the MCP server and the command-line entry point."""
