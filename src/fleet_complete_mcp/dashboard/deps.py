"""Shared dependencies for dashboard routes.

The session is stored on ``app.state`` by ``create_dashboard_app`` and
resolved per request through ``SessionDep``.
"""

from typing import Annotated, cast

from fastapi import Depends, HTTPException, Request

from ..client.session import FleetSession


def get_session(request: Request) -> FleetSession:
    """Get the FleetSession from app.state.

    Raises:
        HTTPException: 503 if no session is attached to the app.

    """
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Fleet Complete session not available.")
    return cast("FleetSession", session)


SessionDep = Annotated[FleetSession, Depends(get_session)]

__all__ = ["SessionDep", "get_session"]
