"""Entry points for the Feedbucket MCP server."""
