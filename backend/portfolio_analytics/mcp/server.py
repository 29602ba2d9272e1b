"""MCP Server for Portfolio Analytics — Streamable HTTP transport on ``settings.mcp_port``.

Runs as a standalone service next to the REST API and exposes the analytics
engine as MCP tools.
"""

import contextlib
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
import uvicorn

from portfolio_analytics.config import settings
from portfolio_analytics.mcp import mcp, set_session_factory

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Database — separate engine for the MCP process
# ---------------------------------------------------------------------------
mcp_engine = create_async_engine(settings.async_database_url, pool_pre_ping=True, pool_size=5, max_overflow=10)
mcp_session_factory = async_sessionmaker(mcp_engine, class_=AsyncSession, expire_on_commit=False)

# Make session factory available to tool modules
set_session_factory(mcp_session_factory)

# ---------------------------------------------------------------------------
# Import tool modules — triggers @mcp.tool() registration
# ---------------------------------------------------------------------------
import portfolio_analytics.mcp.tools.analytics_tools  # noqa: F401, E402


# ---------------------------------------------------------------------------
# Health check endpoint (not part of MCP, just for Docker healthcheck)
# ---------------------------------------------------------------------------
async def health(request):
    return JSONResponse({"status": "healthy", "service": "portfolio-analytics-mcp"})


# ---------------------------------------------------------------------------
# Starlette ASGI app — mounts MCP Streamable HTTP app + health check
# ---------------------------------------------------------------------------
# Create the MCP ASGI sub-app first so session_manager is initialized
mcp_http_app = mcp.streamable_http_app()


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    """Manage MCP session manager lifecycle."""
    async with mcp.session_manager.run():
        logger.info("MCP server started (Streamable HTTP transport)")
        yield
        logger.info("MCP server shutting down")
    await mcp_engine.dispose()


app = Starlette(
    routes=[
        Route("/health", health),
        Mount("/", app=mcp_http_app),
    ],
    lifespan=lifespan,
)

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.mcp_port)
