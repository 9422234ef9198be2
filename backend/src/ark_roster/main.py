"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ark_roster.config import settings
from ark_roster.logging_config import setup_logging
from ark_roster.api.routes.catalog import router as catalog_router
from ark_roster.api.routes.roster import router as roster_router
from ark_roster.api.routes.teams import router as teams_router
from ark_roster.repositories.roster_repository import RosterRepository
from ark_roster.repositories.static_data_repository import StaticDataRepository

REPO_ROOT = Path(__file__).parent.parent.parent.parent


def resolve_path(path: str) -> Path:
    """Resolve a settings path; relative paths are taken from the repo root."""
    resolved = Path(path)
    if resolved.is_absolute():
        return resolved
    return REPO_ROOT / resolved


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    setup_logging(settings.log_level)
    # Tests may install their own repositories before startup
    if not hasattr(app.state, "static_data"):
        app.state.static_data = StaticDataRepository(resolve_path(settings.data_dir))
    if not hasattr(app.state, "roster_repository"):
        app.state.roster_repository = RosterRepository(resolve_path(settings.database_path))
    yield


app = FastAPI(
    title="Ark Roster",
    description="Operator roster tracking and team recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "ark-roster"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Ark Roster API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(catalog_router)
app.include_router(teams_router)
app.include_router(roster_router)
