"""
Spline MCP - Model Context Protocol server for the Spline.design 3D API.

Exposes scenes, objects, materials, states, events, physics and particles
as MCP tools, resources and prompts over stdio or streamable HTTP.
"""

__version__ = "1.0.0"

SERVER_NAME = "Spline.design MCP Server"

__all__ = ['SERVER_NAME', '__version__']
