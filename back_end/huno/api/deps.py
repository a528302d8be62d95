# 라우터에서 쓰는 Dependency: create_app() 이 app.state 에 올려둔 서비스들을 꺼냄
from fastapi import Request

from huno.core.config import Settings
from huno.services.auth_service import AuthService
from huno.services.credits_service import CreditsService
from huno.services.orchestrator import Orchestrator
from huno.services.user_store import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_orchestrator(request: Request) -> Orchestrator:
    return request.app.state.orchestrator


def get_credits_service(request: Request) -> CreditsService:
    return request.app.state.credits_service


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
