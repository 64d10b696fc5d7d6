"""
Tool implementations for the DeeTEE MCP bridge
"""

from .detee import DeteeTool

__all__ = [
    "DeteeTool",
]
