"""
National Park Service MCP server package.

This package exposes LLM-friendly tools and prompts backed by the paginated
``parks`` endpoint of the NPS API. See DESIGN.md for full details.
"""

__all__ = ["config"]
