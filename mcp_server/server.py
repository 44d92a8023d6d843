# Main MCP server implementation for AssetNav

from mcp.server.fastmcp import FastMCP
import logging
import traceback
import functools
import sys

# Instantiate the MCP server
mcp = FastMCP("AssetNav MCP Server")

def error_handler(func):
    """Decorator to catch and log all exceptions, returning standardized JSON-RPC error responses."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logging.error("Exception in %s: %s", func.__name__, traceback.format_exc())
            return {
                "error": {
                    "message": str(e),
                    "type": type(e).__name__,
                }
            }
    return wrapper

# Import tools and resources definitions (they register their handlers via decorators)
import mcp_server.tools
import mcp_server.resources

def main():
    """CLI entrypoint: Start the MCP server"""
    # Centralized logging config: MCP stdio transport owns stdout
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    mcp.run()
