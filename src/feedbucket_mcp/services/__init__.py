"""Service layer for the Feedbucket MCP server."""
