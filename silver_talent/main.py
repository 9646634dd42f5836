# silver_talent/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from silver_talent.api.routes import jobs, applications, blog, contact, subscriptions
from silver_talent.config import Config
from silver_talent.database.mongodb import MongoDB
from silver_talent.dependencies import get_application_notifier, get_db, get_media_store, get_notifier

# Configure logging
logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = Config.missing_media_credentials()
    if missing:
        logger.critical(f"Media store credentials are not defined: {', '.join(missing)}")
        raise RuntimeError("Media store credentials are required: " + ", ".join(missing))
    get_media_store()
    await run_in_threadpool(get_db)
    # Mail problems only disable sending, they never stop the app
    for notifier in (get_notifier(), get_application_notifier()):
        await run_in_threadpool(notifier.verify)
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Silver Talent Backend",
    description="Job board, applications, company blog and contact API",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in Config.CORS_ORIGIN.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_body(message, errors=None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        body = error_body(detail.get("message", ""), detail.get("errors"))
    else:
        body = error_body(str(detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors[".".join(loc) or "body"] = error.get("msg", "Invalid value")
    return JSONResponse(status_code=400, content=error_body("Validation Error", errors))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=error_body("An unexpected internal server error occurred."))


# Include API routers
app.include_router(jobs.router, prefix="/api", tags=["Jobs"])
app.include_router(applications.router, prefix="/api", tags=["Applications"])
app.include_router(contact.router, prefix="/api", tags=["Contact"])
app.include_router(subscriptions.router, prefix="/api", tags=["Subscriptions"])
app.include_router(blog.router, prefix="/api", tags=["Blog"])


@app.get("/")
async def root():
    return {"status": "active", "message": "Silver Talent Backend is running"}


@app.get("/api/health")
def health(db: MongoDB = Depends(get_db)):
    return {
        "status": "UP",
        "message": "Backend is healthy and running.",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "Connected" if db.ping() else "Disconnected",
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
