"""Control API routes for the demo scenario."""

from typing import Protocol

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException


class ISimControl(Protocol):
    async def start(self) -> None: ...

    async def stop(self) -> None: ...


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_control_router(sim: ISimControl | None = None) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start the demo investigation scenario."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await sim.start()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the demo investigation scenario."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await sim.stop()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
