# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the MCP-facing layer.
#
#   router.py      Framework-free routing: argument coercion, dispatch to the
#                  adapter, JSON serialization, the tool/resource error split.
#   mcp_server.py  Registers the catalog with FastMCP and forwards every call
#                  to the router.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build Crunchbase queries (that's core/crunchbase.py)
#   - They do NOT read the environment (that's core/config.py, via main.py)
# =============================================================================
