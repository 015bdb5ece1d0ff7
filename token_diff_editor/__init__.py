"""Token-count deltas and SEARCH/REPLACE diffs served over MCP stdio."""

__version__ = "0.1.0"
