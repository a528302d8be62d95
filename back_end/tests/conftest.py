import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from huno.core.config import Settings
from huno.main import create_app
from huno.services.otp_store import OTPStore
from huno.services.user_store import InMemoryUserStore


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


def make_settings(**overrides) -> Settings:
    values = {
        "OPENROUTER_API_KEY": None,
        "ENVIRONMENT": "development",
        "EXPOSE_DEV_OTP": True,
        "DATABASE_URL": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion_body(model: str, content) -> dict:
    return {
        "id": "gen-test",
        "object": "chat.completion",
        "created": 0,
        "model": model,
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


def echo_handler(calls: list):
    """요청마다 model 이름을 담은 답변을 돌려주는 가짜 OpenRouter."""
    async def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        calls.append({"url": str(request.url), "headers": dict(request.headers), "body": body})
        # 앞에 온 모델일수록 늦게 끝나도록 해서 순서 재조립을 확인
        await asyncio.sleep(0.01 * (5 - len(calls) % 5))
        return httpx.Response(200, json=completion_body(body["model"], f"live:{body['model']}"))

    return handler


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def otp_store(clock):
    return OTPStore(ttl_sec=120, clock=clock)


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings, otp_store, user_store):
    return create_app(settings=settings, otp_store=otp_store, user_store=user_store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(phone: str = "09121234567") -> dict:
        code = client.post("/api/auth/send-otp", json={"phone": phone}).json()["devCode"]
        res = client.post("/api/auth/verify-otp", json={"phone": phone, "code": code})
        assert res.status_code == 200
        return res.json()["user"]

    return _login
