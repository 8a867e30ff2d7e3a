"""Utility modules for the Feedbucket MCP server."""
