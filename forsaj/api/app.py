"""FastAPI server for the Forsaj admin panel"""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from forsaj.accounts.service import AccountService
from forsaj.accounts.store import LocalProfileStore, ProfileStore, RemoteProfileStore
from forsaj.api.middleware.auth import APIKeyAuth
from forsaj.api.middleware.request_logging import RequestLoggingMiddleware
from forsaj.api.middleware.security_headers import SecurityHeadersMiddleware
from forsaj.api.routes.content import router as content_router
from forsaj.api.routes.health import router as health_router
from forsaj.api.routes.records import router as records_router
from forsaj.api.routes.uploads import router as uploads_router
from forsaj.api.routes.users import router as users_router
from forsaj.config import (
    API_HOST,
    API_PORT,
    APP_VERSION,
    DEV_ALLOWED_ORIGINS,
    SERVICE_NAME,
    UPLOAD_URL_PREFIX,
    Settings,
    is_development,
    is_production,
)
from forsaj.content.reader import ContentStore
from forsaj.content.service import ContentService
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import counter, log_event
from forsaj.storage.json_store import JsonCollectionStore
from forsaj.utils.errors import ForsajError

logger = get_logger(__name__)


def build_profile_store(settings: Settings) -> ProfileStore:
    """Hosted accounts when configured, otherwise users.json on local disk."""
    if settings.supabase_url and settings.supabase_key:
        logger.info("Using hosted account store at %s", settings.supabase_url)
        return RemoteProfileStore(settings.supabase_url, settings.supabase_key)
    return LocalProfileStore(settings.users_path)


def _allowed_origins(settings: Settings) -> list[str]:
    origins = list(settings.allowed_origins)
    if is_development():
        origins.extend(o for o in DEV_ALLOWED_ORIGINS if o not in origins)
    return origins


def _check_security_config(settings: Settings) -> None:
    if settings.admin_api_key:
        logger.info("Admin API authentication enabled")
        return
    if is_production():
        logger.critical("FORSAJ_ADMIN_API_KEY is not set in production!")
        raise RuntimeError(
            "Security misconfiguration: FORSAJ_ADMIN_API_KEY not set in "
            "production. Refusing to start with unprotected admin endpoints."
        )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ForsajError)
    async def forsaj_error_handler(request: Request, exc: ForsajError) -> JSONResponse:
        logger.warning(
            "%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.detail
        )
        counter(f"api.errors.{exc.kind.value}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """
        Sanitized 422 for malformed request bodies.

        Side Effects:
            - Logs the full validation errors
            - Increments the validation error counter
        """
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        counter("api.validation_errors")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Invalid request format. Please check your request and try again.",
                "error_count": len(exc.errors()),
                "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        counter("api.errors.unhandled")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal",
                "detail": "Internal server error",
                "message": "Daxili server xətası",
            },
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API for one set of directories.

    Side Effects:
        - Loads .env into the process environment
        - Creates the data and upload directories if missing
        - Loads the content manifest into the app's ContentStore
    """
    load_dotenv()
    settings = settings or Settings.from_env()
    settings.ensure_directories()
    _check_security_config(settings)

    app = FastAPI(title=SERVICE_NAME, version=APP_VERSION)
    _register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    content_service = ContentService(
        components_dir=settings.components_dir,
        content_path=settings.content_path,
        sitemap_path=settings.sitemap_path,
        entry_file=settings.entry_path,
    )
    content_store = ContentStore()
    try:
        content_store.load_from(content_service.load_pages)
    except ForsajError as e:
        # Store stays LOADING; lookups answer with fallbacks until the next save
        logger.error("Could not load content manifest: %s", e.detail)

    accounts = AccountService(build_profile_store(settings))

    app.state.settings = settings
    app.state.content_service = content_service
    app.state.content_store = content_store
    app.state.collections = JsonCollectionStore(settings.data_dir)
    app.state.accounts = accounts
    app.state.auth = APIKeyAuth(settings.admin_api_key, accounts)

    app.include_router(health_router)
    app.include_router(content_router)
    app.include_router(records_router)
    app.include_router(uploads_router)
    app.include_router(users_router)
    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")

    log_event("api.startup", service=SERVICE_NAME, version=APP_VERSION)
    return app


def main() -> None:
    """Console entry point: ``forsaj-api``."""
    import uvicorn

    uvicorn.run("forsaj.api.app:create_app", factory=True, host=API_HOST, port=API_PORT)
