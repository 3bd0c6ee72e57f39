# mycontacts/main.py
from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mycontacts.core.config import get_settings
from mycontacts.core.errors import AppError, InternalError, error_body
from mycontacts.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from mycontacts.models import user as _user_models  # noqa: F401
from mycontacts.models import contact as _contact_models  # noqa: F401

# Routers
from mycontacts.routers.auth import router as auth_router
from mycontacts.routers.contacts import router as contacts_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables + unique indexes.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # Browsers reject credentials together with a wildcard origin.
    allow_credentials=origins != ["*"],
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# --- Error handlers ---


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc.code),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies / params are reported as 400, not FastAPI's 422."""
    details = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query"))
        details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "Invalid request"
    if details:
        message = f"Invalid request: {'; '.join(details)}"
    return JSONResponse(
        status_code=400,
        content=error_body(400, message, "invalid_input"),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} failed", exc_info=exc)
    # Never echo the original exception to the client.
    return await app_error_handler(request, InternalError())


app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(contacts_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "mycontacts-api"}


def run() -> None:
    """Console entrypoint: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run("mycontacts.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
