import logging
import os
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from socialcare.config import get_settings
from socialcare.database import engine, init_models
from socialcare.error_handlers import register_exception_handlers
from socialcare.routers import auth, users, cases, tasks, meetings, comments, calendar, dashboard

settings = get_settings()
logger = logging.getLogger("socialcare")


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: logging, upload directory, tables. A store that cannot be reached is fatal here.
    configure_logging()
    os.makedirs(settings.upload_dir, exist_ok=True)
    await init_models()
    logger.info("Social Care 365 API started")
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Social Care 365 API",
    description="Case management for social-care caseworkers",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request."""
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


app.add_middleware(RequestLogMiddleware)
register_exception_handlers(app)

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(cases.router, prefix="/api/cases", tags=["Cases"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(meetings.router, prefix="/api/meetings", tags=["Meetings"])
app.include_router(comments.router, prefix="/api", tags=["Comments"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

# Uploaded attachments, served as stored on disk
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/")
async def root():
    return {"message": "Social Care 365 API", "version": "1.0.0", "status": "running"}


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "socialcare365-api"}
