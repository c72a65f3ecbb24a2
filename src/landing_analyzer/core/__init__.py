"""Core analysis logic: document access, extraction, scoring, feedback, models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework; the MCP server is a thin layer over it.
"""
