from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import InternalError, NotFound, PortfolioError
from app.database.mongodb import ContactStore, close_mongo_connection, connect_to_mongo
from app.models.contact import utc_now
from app.routes import contacts
from app.schemas.response import HealthResponse
from app.services.contact_service import ContactService
from app.services.email_service import EmailService
from app.static import PublicFiles
from app.utils.logger import setup_logger

# 🧠 Setup logger
logger = setup_logger(default_settings.LOG_LEVEL, default_settings.LOG_FILE)


def error_response(exc: PortfolioError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


def create_app(
    settings: Optional[Settings] = None,
    mailer: Optional[EmailService] = None,
    store: Optional[ContactStore] = None,
) -> FastAPI:
    """
    Build the portfolio backend.

    A store passed in is used as-is; otherwise the lifespan connects to
    MongoDB when MONGODB_URI is set and leaves persistence off when it is not.
    """
    settings = settings or default_settings
    contact_service = ContactService(settings, mailer or EmailService(settings), store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        mongodb = None
        if store is None:
            mongodb = await connect_to_mongo(settings)
            if mongodb:
                contact_service.store = ContactStore(mongodb)

        if not contact_service.mailer.configured:
            logger.warning("EMAIL_USER/EMAIL_PASS missing, contact submissions will fail to send")

        logger.info(f"🚀 Server running on port {settings.PORT}")
        logger.info(f"🔧 Backend API: http://localhost:{settings.PORT}/api")
        yield
        # Shutdown
        await close_mongo_connection(mongodb)
        logger.info("🛑 Application shutdown")

    # ⚙️ Initialize FastAPI app
    app = FastAPI(
        title=settings.APP_NAME,
        description="Portfolio contact form backend",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.contact_service = contact_service

    # 🌍 CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 🧩 Include Routers
    app.include_router(contacts.router, prefix="/api", tags=["contacts"])

    # 💓 Health Check Endpoint
    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(
            status="OK",
            message="Portfolio Backend is running!",
            timestamp=utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )

    # 🚨 Exception Handlers
    @app.exception_handler(PortfolioError)
    async def portfolio_exception_handler(request: Request, exc: PortfolioError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # No route (or no route for this method) is reported the same way
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(NotFound())
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Server Error: {exc}", exc_info=True)
        return error_response(InternalError())

    # 🖼️ Front-end bundle, mounted last so the API routes win
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", PublicFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.warning(f"Static directory {static_dir.resolve()} not found, front end will not be served")

    return app


app = create_app()

# 🏁 Run App
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=False,
        log_level=default_settings.LOG_LEVEL.lower()
    )
