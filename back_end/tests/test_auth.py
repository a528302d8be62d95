import pytest

from huno.core.errors import CodeMismatch, Expired, InvalidCode, InvalidPhone, NoPendingChallenge
from huno.services.auth_service import AuthService

from conftest import make_settings

PHONE = "09121234567"


@pytest.fixture
def auth(otp_store, user_store):
    return AuthService(otp_store, user_store, welcome_credits=50)


# ---------- service ----------
def test_send_otp_rejects_invalid_phone(auth, otp_store):
    with pytest.raises(InvalidPhone):
        auth.send_otp("12345")
    assert len(otp_store) == 0


def test_send_otp_stores_code_with_two_minute_expiry(auth, otp_store, clock):
    issued = auth.send_otp(PHONE)
    stored = otp_store.get(PHONE)
    assert stored.code == issued.code
    assert stored.expires_at == clock() + 120


def test_send_otp_overwrites_pending_code(otp_store, user_store):
    codes = iter(["111111", "222222"])
    auth = AuthService(otp_store, user_store, code_factory=lambda: next(codes))
    auth.send_otp(PHONE)
    auth.send_otp(PHONE)
    assert otp_store.get(PHONE).code == "222222"
    with pytest.raises(CodeMismatch):
        auth.verify_otp(PHONE, "111111")


def test_verify_succeeds_exactly_once(auth):
    code = auth.send_otp(PHONE).code
    user = auth.verify_otp(PHONE, code)
    assert user.phone == PHONE
    with pytest.raises(NoPendingChallenge):
        auth.verify_otp(PHONE, code)


def test_verify_after_expiry_removes_challenge(auth, otp_store, clock):
    code = auth.send_otp(PHONE).code
    clock.advance(121)
    with pytest.raises(Expired):
        auth.verify_otp(PHONE, code)
    assert otp_store.get(PHONE) is None
    with pytest.raises(NoPendingChallenge):
        auth.verify_otp(PHONE, code)


def test_verify_at_exact_expiry_is_still_valid(auth, clock):
    code = auth.send_otp(PHONE).code
    clock.advance(120)
    assert auth.verify_otp(PHONE, code).phone == PHONE


def test_mismatch_keeps_challenge(auth, otp_store):
    code = auth.send_otp(PHONE).code
    wrong = "000000" if code != "000000" else "111111"
    with pytest.raises(CodeMismatch):
        auth.verify_otp(PHONE, wrong)
    assert otp_store.get(PHONE) is not None
    assert auth.verify_otp(PHONE, code).phone == PHONE


@pytest.mark.parametrize("code", [None, "", "12345", "1234567", 123456])
def test_verify_rejects_malformed_code(auth, code):
    auth.send_otp(PHONE)
    with pytest.raises(InvalidCode):
        auth.verify_otp(PHONE, code)


def test_first_login_grants_welcome_bonus_once(auth):
    first = auth.verify_otp(PHONE, auth.send_otp(PHONE).code)
    assert first.credits == 50

    second = auth.verify_otp(PHONE, auth.send_otp(PHONE).code)
    assert second.id == first.id
    assert second.credits == 50


# ---------- HTTP ----------
def test_send_otp_endpoint(client):
    res = client.post("/api/auth/send-otp", json={"phone": PHONE})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "کد تایید ارسال شد"
    assert len(body["devCode"]) == 6


def test_send_otp_endpoint_invalid_phone(client):
    res = client.post("/api/auth/send-otp", json={"phone": "0912"})
    assert res.status_code == 400
    assert res.json() == {"error": "شماره موبایل نامعتبر است"}


def test_send_otp_missing_body_is_400(client):
    res = client.post("/api/auth/send-otp", content=b"not json", headers={"content-type": "application/json"})
    assert res.status_code == 400
    assert "error" in res.json()


@pytest.mark.parametrize(
    "overrides",
    [
        {"EXPOSE_DEV_OTP": False, "ENVIRONMENT": "development"},
        {"EXPOSE_DEV_OTP": True, "ENVIRONMENT": "production"},
    ],
)
def test_dev_code_hidden_unless_flag_and_not_production(overrides, otp_store, user_store):
    from fastapi.testclient import TestClient
    from huno.main import create_app

    app = create_app(settings=make_settings(**overrides), otp_store=otp_store, user_store=user_store)
    with TestClient(app) as c:
        body = c.post("/api/auth/send-otp", json={"phone": PHONE}).json()
    assert body["success"] is True
    assert "devCode" not in body
    assert otp_store.get(PHONE) is not None


def test_verify_otp_endpoint_flow(client, clock):
    code = client.post("/api/auth/send-otp", json={"phone": PHONE}).json()["devCode"]

    res = client.post("/api/auth/verify-otp", json={"phone": PHONE, "code": code})
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["phone"] == PHONE
    assert user["credits"] == 50
    assert set(user) == {"id", "phone", "credits", "createdAt", "updatedAt", "settings"}

    again = client.post("/api/auth/verify-otp", json={"phone": PHONE, "code": code})
    assert again.status_code == 400
    assert again.json()["error"] == "کد تایید یافت نشد. لطفاً دوباره درخواست کنید."


def test_verify_otp_endpoint_expired(client, clock):
    code = client.post("/api/auth/send-otp", json={"phone": PHONE}).json()["devCode"]
    clock.advance(180)
    res = client.post("/api/auth/verify-otp", json={"phone": PHONE, "code": code})
    assert res.status_code == 400
    assert res.json()["error"] == "کد تایید منقضی شده است"


def test_verify_otp_endpoint_mismatch(client):
    code = client.post("/api/auth/send-otp", json={"phone": PHONE}).json()["devCode"]
    wrong = "999999" if code != "999999" else "888888"
    res = client.post("/api/auth/verify-otp", json={"phone": PHONE, "code": wrong})
    assert res.status_code == 400
    assert res.json()["error"] == "کد تایید اشتباه است"


def test_new_user_log_shows_formatted_phone(auth, caplog):
    with caplog.at_level("INFO", logger="huno.services.auth_service"):
        auth.verify_otp(PHONE, auth.send_otp(PHONE).code)
    assert "0912-123-4567" in caplog.text
