"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import control, events, observability, repository, tools
from .routes.control import ISimControl


def create_fastapi_app(
    application: Application | None = None,
    sim: ISimControl | None = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or Application()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        # Startup
        await application.start()
        yield
        # Shutdown
        if sim is not None:
            await sim.stop()
        await application.stop()

    fastapi_app = FastAPI(
        title="Voice Bug Agent API",
        description="Tool webhook and live status stream for the voice bug agent",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.application = application

    # Enable CORS
    origins = application.settings.cors_origins
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    fastapi_app.include_router(tools.create_tools_router(application))
    fastapi_app.include_router(events.create_events_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))
    fastapi_app.include_router(repository.create_repository_router(application))
    fastapi_app.include_router(control.create_control_router(sim))

    return fastapi_app
