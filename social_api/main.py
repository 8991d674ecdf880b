"""SocialMedia API - FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text

from social_api.api.v1.api import api_router
from social_api.core.config import Settings, settings as default_settings
from social_api.core.errors import AppError, ConfigurationError
from social_api.core.logging import configure_logging
from social_api.core.security import build_password_context
from social_api.db.session import Base, build_engine, build_session_maker
from social_api.services.email_templates import EmailComposer
from social_api.services.mailer import Mailer, build_mailer
from social_api.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

# Routes whose error bodies use "error" rather than "message".
ERROR_KEY_PATHS = ("/auth/register",)
SERVER_ERROR_KEY_PATHS = ("/auth/register", "/auth/login")


def check_required_settings(settings: Settings) -> None:
    if not settings.DATABASE_URL:
        raise ConfigurationError("DATABASE_URL is not defined in the environment variables.")


def _error_key(request: Request, paths: tuple[str, ...] = ERROR_KEY_PATHS) -> str:
    return "error" if request.url.path.rstrip("/").endswith(paths) else "message"


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Settings | None = None, mailer: Mailer | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        try:
            check_required_settings(settings)
        except ConfigurationError:
            logger.critical("DATABASE_URL is not defined in the environment variables. Exiting.")
            raise

        engine = build_engine(settings)
        if settings.DB_CREATE_ALL:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database: OK")
        except Exception as e:
            logger.warning("Database connection failed: %s", e)

        notifier = NotificationDispatcher(
            mailer or build_mailer(settings),
            EmailComposer(settings.MAIL_PRODUCT_NAME, settings.MAIL_PRODUCT_LINK),
            maxsize=settings.NOTIFICATION_QUEUE_SIZE,
        )
        await notifier.start()

        app.state.settings = settings
        app.state.engine = engine
        app.state.session_maker = build_session_maker(engine)
        app.state.pwd_context = build_password_context(settings.BCRYPT_ROUNDS)
        app.state.notifier = notifier
        logger.info("API: /api/v1 | Docs: /docs | Health: /health | Ready (DB): /ready")
        try:
            yield
        finally:
            await notifier.stop()
            await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="API for managing users, posts, and comments in a social media platform.",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={_error_key(request): exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={_error_key(request): _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={_error_key(request, SERVER_ERROR_KEY_PATHS): str(exc)})

    @app.get("/")
    async def root():
        return {
            "name": settings.APP_NAME,
            "status": "ok",
            "docs": "/docs",
            "health": "/health",
            "api": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/ready")
    async def ready(request: Request):
        """Health check including DB - use to verify backend is fully operational."""
        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok", "database": "connected"}
        except Exception as e:
            return JSONResponse(
                status_code=503,
                content={"status": "error", "database": str(e)},
            )

    return app


app = create_app()
