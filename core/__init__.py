# =============================================================================
# core/__init__.py
# =============================================================================
# This package holds the Crunchbase side of the server: configuration, the
# error taxonomy, typed tool requests, response shapes and the HTTP adapter.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  The adapter can
#   be driven from a plain asyncio script (or a test) with no MCP host.
# =============================================================================
