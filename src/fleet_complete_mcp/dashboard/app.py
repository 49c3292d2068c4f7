"""FastAPI application for the Fleet Complete dashboard.

The app owns one ``FleetSession`` backed by the Hub GraphQL API. Package
errors raised by route handlers are turned into ``{success: false, error}``
responses by a single exception handler.
"""

import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..client.session import FleetSession, create_graphql_session
from ..config import FleetConfig
from ..errors import ApiError, AuthError, FleetCompleteError, UpstreamError, ValidationError
from .routes import SERVICE_NAME, router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("fleet_complete_mcp.dashboard")

HTTP_STATUS_BY_ERROR: dict[type[FleetCompleteError], int] = {
    AuthError: 401,
    ValidationError: 400,
    UpstreamError: 502,
    ApiError: 502,
}


def error_status(exc: FleetCompleteError) -> int:
    """Return the HTTP status used to report ``exc``."""
    for error_type, status in HTTP_STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 500


async def handle_fleet_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a package error as the dashboard's failure envelope."""
    if not isinstance(exc, FleetCompleteError):
        raise exc
    status = error_status(exc)
    logger.warning("%s %s failed (%d): %s", request.method, request.url.path, status, exc.message)
    return JSONResponse(status_code=status, content={"success": False, "error": exc.message})


def create_dashboard_app(session: FleetSession) -> FastAPI:
    """Create the FastAPI application with all routes bound to ``session``."""
    app = FastAPI(
        title=SERVICE_NAME,
        description="Dashboard and JSON proxy for the Fleet Complete Hub GraphQL API",
        version="0.1.0",
    )
    app.state.session = session
    app.add_exception_handler(FleetCompleteError, handle_fleet_error)
    app.include_router(router)
    return app


def main() -> None:
    """Entry point for the fleet-complete-dashboard console script."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
    )
    config = FleetConfig.from_env()
    app = create_dashboard_app(create_graphql_session(config))

    logger.info("%s running on port %d", SERVICE_NAME, config.port)
    logger.info("Dashboard: http://%s:%d", config.host, config.port)
    logger.info("GraphQL API: %s", config.graphql_url)
    config.warn_if_unconfigured(logger)

    uvicorn.run(app, host=config.host, port=config.port, log_level=LOG_LEVEL.lower())


__all__ = ["create_dashboard_app", "error_status", "handle_fleet_error", "main"]


if __name__ == "__main__":
    main()
