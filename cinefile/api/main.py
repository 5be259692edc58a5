"""
FastAPI application entry point for the Cinefile API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinefile import __version__
from cinefile.api.routers import session, favorites, ratings, movies, system

app = FastAPI(
    title="Cinefile API",
    description="Browse movies from TMDB, keep favorites and rate what you watched",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session.router)
app.include_router(favorites.router)
app.include_router(ratings.router)
app.include_router(movies.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Cinefile API",
        "docs": "/docs",
        "health": "/api/health",
    }


def run():
    """Run the API with uvicorn using the configured host, port and log level."""
    import uvicorn

    from cinefile.config import get_api_host, get_api_port, get_log_level
    from cinefile.utils.logging_config import configure_api_logging

    configure_api_logging(get_log_level())
    uvicorn.run(app, host=get_api_host(), port=get_api_port())


if __name__ == "__main__":
    run()
