"""HTTP transport for the sequential thinking server."""
