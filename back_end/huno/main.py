import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from huno.api.v1.router import router as v1_router
from huno.core.config import Settings, settings as default_settings
from huno.core.errors import HunoError, ValidationError

# DB 관련 import (Base / engine)
from huno.db.base import Base
from huno.db.session import build_engine, build_sessionmaker

# 모델들을 등록하기 위해 import (Base.metadata에 모델이 올라가도록)
import huno.db.models  # noqa: F401

from huno.services.auth_service import AuthService
from huno.services.credits_service import CreditsService
from huno.services.openrouter_service import OpenRouterService
from huno.services.orchestrator import Orchestrator
from huno.services.otp_store import OTPStore
from huno.services.user_store import InMemoryUserStore, SqlUserStore, UserStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "خطا در پردازش درخواست"


def _build_user_store(settings: Settings) -> UserStore:
    if not settings.DATABASE_URL:
        return InMemoryUserStore()

    engine = build_engine(settings.DATABASE_URL)
    # 개발 단계 편의용: 테이블 자동 생성 (운영은 alembic upgrade head)
    Base.metadata.create_all(bind=engine)
    return SqlUserStore(build_sessionmaker(engine))


def create_app(
    settings: Optional[Settings] = None,
    otp_store: Optional[OTPStore] = None,
    user_store: Optional[UserStore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    if settings is None:
        settings = default_settings
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    # 주입된 저장소는 비어 있어도(len 0) 그대로 사용
    if otp_store is None:
        otp_store = OTPStore(ttl_sec=settings.OTP_TTL_SECONDS)
    if user_store is None:
        user_store = _build_user_store(settings)
    backend = OpenRouterService(settings, http_client=http_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not backend.live:
            logger.warning("OPENROUTER_API_KEY is not set: running in demo mode (fallback responses only)")
        yield
        await backend.aclose()

    app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

    app.state.settings = settings
    app.state.otp_store = otp_store
    app.state.user_store = user_store
    app.state.auth_service = AuthService(otp_store, user_store, welcome_credits=settings.WELCOME_CREDITS)
    app.state.credits_service = CreditsService(user_store)
    app.state.orchestrator = Orchestrator(backend, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HunoError)
    async def huno_error_handler(request: Request, exc: HunoError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("invalid request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": ValidationError.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    app.include_router(v1_router, prefix="/api")

    # 연결 체크
    @app.get("/health")
    def health():
        return {"ok": True, "live": backend.live}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("huno.main:app", host=default_settings.HOST, port=default_settings.PORT)
