"""Request-scoped access to the coordinators built in the app lifespan."""
from fastapi import HTTPException, Request

from newsdesk.core.constants import ALL_SOURCES
from newsdesk.services.refresh.coordinator import RefreshCoordinator


def get_coordinators(request: Request) -> dict[str, RefreshCoordinator]:
    coordinators = getattr(request.app.state, "coordinators", None)
    if coordinators is None:
        raise HTTPException(status_code=503, detail="Refresh coordinators not initialized")
    return coordinators


def coordinator_for(request: Request, source: str) -> RefreshCoordinator:
    coordinators = get_coordinators(request)
    if source not in coordinators:
        raise HTTPException(status_code=404, detail=f"Unknown source: {source}. Available: {list(ALL_SOURCES)}")
    return coordinators[source]
