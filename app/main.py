"""Vehicle Safety Checklist Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.database import create_db_and_tables
from app.core.errors import ChecklistError
from app.routes import checklists, dashboard, export, pages, vehicles

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Vehicle Safety Checklist application")
    create_db_and_tables()
    yield
    logger.info("Vehicle Safety Checklist application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Daily vehicle safety inspections with submission history and monthly export",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files
app.mount(
    "/static",
    StaticFiles(directory=str(Path(__file__).parent / "static")),
    name="static",
)

# Include routers
app.include_router(checklists.router)
app.include_router(vehicles.router)
app.include_router(export.router)
app.include_router(dashboard.router)
app.include_router(pages.router)


@app.exception_handler(ChecklistError)
async def checklist_error_handler(request: Request, exc: ChecklistError):
    """Report validation, duplicate, not-found and parameter errors."""
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed path, query or body values in the validation shape."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or "body",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        {"message": "Validation error", "errors": errors}, status_code=400
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    """Log unexpected failures and hide their detail from the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"message": "Internal server error"}, status_code=500)


@app.get("/")
async def root(request: Request):
    """Redirect root to the vehicle number page."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/start")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
