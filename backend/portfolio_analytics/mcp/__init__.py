"""MCP package — shared FastMCP instance and session factory."""

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from portfolio_analytics.config import settings

# Shared FastMCP instance — tools register on this via @mcp.tool()
mcp = FastMCP(
    name="portfolio-analytics-mcp",
    instructions="Portfolio Analytics MCP server. Provides revenue, occupancy, and property ranking analytics for short-term rental portfolios.",
    port=settings.mcp_port,
    stateless_http=True,
    json_response=True,
    transport_security=TransportSecuritySettings(
        enable_dns_rebinding_protection=True,
        allowed_hosts=[f"{host}:{settings.mcp_port}" for host in ("localhost", "mcp", "127.0.0.1")],
    ),
)

# Session factory — set by server.py at startup, used by tool modules
_session_factory = None


def set_session_factory(factory):
    global _session_factory
    _session_factory = factory


def get_session_factory():
    if _session_factory is None:
        raise RuntimeError("MCP session factory not initialized. Is server.py running?")
    return _session_factory
