"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from floorplan.core.errors import EntityNotFoundError, UnknownCommandError
from floorplan.api.routes import router


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    errors = exc.errors(include_url=False, include_context=False)
    return JSONResponse(status_code=422, content={"detail": errors})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Floor Plan Editor Core",
        description="Wall topology, offset geometry and trim engine",
        version="0.1.0",
    )

    # CORS: allow the Vite dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Caller mistakes raised from the editor core
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(UnknownCommandError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)

    app.include_router(router, prefix="/api")

    return app


app = create_app()
