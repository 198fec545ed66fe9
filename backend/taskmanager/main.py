"""Task Manager FastAPI application.

Entry point for the backend server. create_app() wires a TaskService into
the routers through app.state; `app` is the default instance for uvicorn:

    uvicorn taskmanager.main:app --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskmanager.api.health import VERSION
from taskmanager.api.health import router as health_router
from taskmanager.api.v1.tasks import router as tasks_router
from taskmanager.config import Settings, settings
from taskmanager.errors import AppError
from taskmanager.repository.task_repository import InMemoryTaskRepository
from taskmanager.services.task_service import TaskService

logger = logging.getLogger(__name__)

MESSAGE_INVALID_INPUT = "Invalid input"
MESSAGE_INTERNAL_ERROR = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Task Manager %s starting", VERSION)
    yield
    logger.info("Task Manager shutting down with %d tasks in memory", len(app.state.task_service.get_tasks()))


def _error_response(error: AppError) -> JSONResponse:
    content = {"error": str(error)}
    if error.field:
        content["field"] = error.field
    return JSONResponse(status_code=error.code, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render AppError and subclasses (ValidationError, NotFoundError)."""
    if exc.code < 500:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
    else:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly-typed fields are a bad request, not a 422."""
    details = [
        {"loc": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("Invalid body on %s %s: %s", request.method, request.url.path, details)
    error = AppError.bad_request(MESSAGE_INVALID_INPUT)
    return JSONResponse(status_code=error.code, content={"error": error.message, "details": details})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Prevent internal details from leaking."""
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return _error_response(AppError.internal(MESSAGE_INTERNAL_ERROR))


def create_app(service: TaskService | None = None, app_settings: Settings | None = None) -> FastAPI:
    """Build the application around a TaskService.

    Args:
        service: Service handling all task routes. Defaults to a new service
            over an empty InMemoryTaskRepository.
        app_settings: Settings to use. Defaults to the module-level settings.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Task Manager",
        description="In-memory task management REST API",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.task_service = service if service is not None else TaskService(InMemoryTaskRepository())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(tasks_router)

    @app.get("/")
    async def root():
        return {"name": "TaskManager", "version": VERSION, "status": "running"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve the default app."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    logger.info("Starting server on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
