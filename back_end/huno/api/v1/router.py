from fastapi import APIRouter
from huno.api.v1.endpoints import auth, catalog, chat, credits, users

# main.py 에서 prefix="/api" 로 붙임
# 최종 경로 예: /api + /auth + /send-otp = /api/auth/send-otp
router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(chat.router, tags=["chat"])
router.include_router(credits.router, prefix="/credits", tags=["credits"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(catalog.router, tags=["catalog"])
