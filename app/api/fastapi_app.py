from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.auth.routes import router as auth_router
from app.api.cards.routes import router as cards_router
from app.api.discovery.routes import router as discovery_router
from app.api.health import router as health_router
from app.api.playlist.routes import router as playlist_router
from app.api.profile.routes import router as profile_router
from app.config import LOG_LEVEL, allowed_origins
from app.core import AppError, configure_logging, log_error, log_info
from app.data import dispose_engine, init_db

configure_logging(LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    log_info("SoundHaven backend started.")
    yield
    dispose_engine()


app = FastAPI(
    title="SoundHaven API",
    version="1.0.0",
    description="Backend API for SoundHaven: Spotify login, managed playlist and daily cards.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and query params are client errors, reported like missing data
    return JSONResponse({"error": "Invalid request"}, status_code=400)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log_error(f"Store error in {request.url.path}: {exc}")
    return JSONResponse({"error": "Internal server error"}, status_code=500)


# Auth routes
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])

# Spotify-backed routes
app.include_router(playlist_router, prefix="/api/playlist", tags=["playlist"])
app.include_router(profile_router, prefix="/api", tags=["profile"])

# Store-backed routes
app.include_router(discovery_router, prefix="/api/discovery", tags=["discovery"])
app.include_router(cards_router, prefix="/api/cards", tags=["cards"])

app.include_router(health_router, prefix="/api", tags=["health"])
