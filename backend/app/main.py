"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import Base, engine
from app.errors import StoreError, ValidationError

# Import routers
from app.routers import ballots, catalog, groups, invites, results, setup

# Import all models so Base.metadata knows about them
from app.models.group import Group                # noqa: F401
from app.models.invite import Invite              # noqa: F401
from app.models.category import Category, Nominee  # noqa: F401
from app.models.ballot import Ballot, Vote        # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Award Rooms",
    description="Private group voting rooms — invite-only ballots with host-controlled reveal",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(groups.router, prefix="/api/groups", tags=["Groups"])
app.include_router(invites.router, prefix="/api/groups", tags=["Invites"])
app.include_router(setup.router, prefix="/api/groups", tags=["Setup"])
app.include_router(ballots.router, prefix="/api/groups", tags=["Ballots"])
app.include_router(results.router, prefix="/api/groups", tags=["Results"])
app.include_router(catalog.router, prefix="/api/catalog", tags=["Catalog"])


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies share the ValidationError envelope instead of FastAPI's 422."""
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    fields = [field for field in fields if field]
    error = ValidationError(
        f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request body"
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": error.detail})


@app.exception_handler(SQLAlchemyError)
def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Store failures are opaque to callers; the traceback stays in the log."""
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    error = StoreError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
