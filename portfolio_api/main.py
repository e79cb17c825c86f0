import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.config import settings
from portfolio_api.database import Base, engine
from portfolio_api.routers import (
    auth,
    contact,
    education,
    gallery,
    health,
    profile,
    projects,
    skills,
    testimonials,
    upload,
)
from portfolio_api.services.upload_service import ensure_upload_dir
from portfolio_api.utils.exceptions import ValidationError, pydantic_errors
from portfolio_api.utils.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from portfolio_api.utils.response import create_response, handle_exception
from seed import run_seed

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Auto create tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_seed()
    logger.info("Environment: %s", settings.APP_ENV)
    logger.info("Rate limit: %s requests per %s minutes", settings.RATE_LIMIT_MAX, settings.RATE_LIMIT_WINDOW_MINUTES)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Added last runs first: CORS wraps everything, then security headers, then the limiter.
if not settings.is_production:
    app.add_middleware(RequestLoggingMiddleware, trust_proxy=settings.TRUST_PROXY)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.RATE_LIMIT_MAX,
    window_seconds=settings.RATE_LIMIT_WINDOW_MINUTES * 60,
    trust_proxy=settings.TRUST_PROXY,
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
)

# Add routes
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(skills.router)
app.include_router(skills.admin_router)
app.include_router(projects.router)
app.include_router(projects.admin_router)
app.include_router(testimonials.router)
app.include_router(testimonials.admin_router)
app.include_router(education.router)
app.include_router(education.admin_router)
app.include_router(gallery.router)
app.include_router(gallery.admin_router)
app.include_router(contact.router)
app.include_router(contact.admin_router)
app.include_router(upload.router)
app.include_router(health.router)

# Serve uploaded assets
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=str(ensure_upload_dir())),
    name="uploads",
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return handle_exception(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return create_response(
        message="Validation errors",
        status_code=status.HTTP_400_BAD_REQUEST,
        errors=pydantic_errors(exc.errors()),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return create_response(message="API endpoint not found", status_code=exc.status_code)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return create_response(message=detail, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    return handle_exception(exc, "Something went wrong!")


def main() -> None:
    import uvicorn

    uvicorn.run("portfolio_api.main:app", host="0.0.0.0", port=settings.PORT, reload=not settings.is_production)


if __name__ == "__main__":
    main()
