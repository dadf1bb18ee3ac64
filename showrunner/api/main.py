"""Main FastAPI application for Showrunner."""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from showrunner.core.env_loader import ensure_env_loaded
ensure_env_loaded()

from showrunner import __version__
from showrunner.api.limits import limiter
from showrunner.api.settings import get_settings
from showrunner.api.routers import screenplay, characters, casting

settings = get_settings()

app = FastAPI(
    title="Showrunner API",
    description="Screenplay structuring, character registry and casting response decoding",
    version=__version__,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(screenplay.router, prefix="/api/screenplay", tags=["screenplay"])
app.include_router(characters.router, prefix="/api/characters", tags=["characters"])
app.include_router(casting.router, prefix="/api/casting", tags=["casting"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Showrunner API", "version": __version__}


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def start_server(host: str = None, port: int = None, reload: bool = False):
    """Start the FastAPI server."""
    uvicorn.run(
        "showrunner.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",
    )


if __name__ == "__main__":
    start_server()
