from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.domains.transactions.routes import router as transaction_router
from app.domains.dashboard.routes import router as dashboard_router
from app.domains.transactions.services import TransactionService
from app.shared.yaya_service import YaYaAPI
from app.config.logging_config import get_logger, setup_logging
from app.config.setting import Settings, get_settings
import uvicorn
from dotenv import load_dotenv

load_dotenv()

logger = get_logger("yaya_dashboard")


def create_app(settings: Optional[Settings] = None, client: Optional[YaYaAPI] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Built once per process and shared by every request
    client = client or YaYaAPI(settings)
    app.state.settings = settings
    app.state.yaya_api = client
    app.state.transaction_service = TransactionService(client, settings)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            "HTTP %s %s from %s",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
        )
        return await call_next(request)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Something went wrong!"})

    @app.get("/")
    async def health():
        return {
            "message": "YaYa Wallet Transaction Dashboard API",
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.on_event("startup")
    async def startup():
        logger.info(f"{settings.app_name} starting on port {settings.port}")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"API Key: {'Configured' if settings.yaya_api_key else 'Missing'}")
        if not settings.current_user_account_id:
            logger.warning("CURRENT_USER_ACCOUNT_ID is not set; every non top-up transaction will show as outgoing")

    app.include_router(transaction_router, prefix="/api", tags=["Transaction"])
    app.include_router(dashboard_router, tags=["Dashboard"])
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
