"""
Take-a-Number API - Main FastAPI application.

A real-time waitlist: customers take a number, an admin calls or cancels
entries, and every change is pushed to connected clients over Socket.IO.
"""

from contextlib import asynccontextmanager
from typing import Optional

import socketio
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from waitlist.config import Settings, get_settings
from waitlist.database import build_engine, build_session_maker, init_db
from waitlist.errors import QueueError
from waitlist.routers import admin, queue
from waitlist.services.notifier import QueueNotifier, create_socket_server

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Owns the database engine from startup to shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    print(f"Starting {settings.app_name} in {settings.app_env} mode...", flush=True)
    engine = build_engine(settings)
    await init_db(engine)
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)
    if settings.is_sqlite and not settings.database_url:
        print(f"Database initialized at {settings.db_path}.", flush=True)
    else:
        print("Database initialized.", flush=True)

    yield

    # Shutdown
    print("Shutting down...", flush=True)
    await engine.dispose()


async def queue_error_handler(request: Request, exc: QueueError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Real-time take-a-number waitlist",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    sio = create_socket_server(settings.cors_origins)
    app.state.settings = settings
    app.state.sio = sio
    app.state.notifier = QueueNotifier(sio)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QueueError, queue_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/")
    async def root():
        """Root endpoint - basic health check."""
        return {
            "app": settings.app_name,
            "version": VERSION,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
    app.include_router(queue.router, prefix="/api/queue", tags=["Queue"])

    return app


def create_asgi_app(app: FastAPI) -> socketio.ASGIApp:
    """Serve Socket.IO at /socket.io/ and hand everything else to FastAPI."""
    return socketio.ASGIApp(app.state.sio, other_asgi_app=app)


app = create_app()
asgi_app = create_asgi_app(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = app.state.settings
    print(f"Server running on http://localhost:{settings.port}", flush=True)
    uvicorn.run(asgi_app, host=settings.host, port=settings.port)
