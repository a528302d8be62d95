import httpx
import pytest

from huno.client.chat_state import (
    GENERIC_ERROR_TEXT,
    INSUFFICIENT_CREDITS_TEXT,
    AuthRequired,
    ChatState,
)

PHONE = "09121234567"


@pytest.fixture
def state(client):
    return ChatState(client)


def _login(state: ChatState) -> dict:
    code = state.send_otp(PHONE)["devCode"]
    return state.verify_otp(PHONE, code)


def test_login_sets_user(state):
    assert not state.is_authenticated
    user = _login(state)
    assert state.is_authenticated
    assert user["credits"] == 50


def test_verify_with_wrong_code_raises(state):
    state.send_otp(PHONE)
    with pytest.raises(ValueError):
        state.verify_otp(PHONE, "12")
    assert not state.is_authenticated


def test_requires_authentication_rules(state):
    assert state.requires_authentication()  # chat 첫 메시지
    state.set_mode("analyze")
    assert state.requires_authentication()
    _login(state)
    assert not state.requires_authentication()


def test_submit_without_login_raises(state):
    with pytest.raises(AuthRequired):
        state.submit("hi")
    assert state.messages == []


def test_submit_appends_replies_and_deducts_credits(state, client):
    user = _login(state)
    state.set_selected_models(["gpt-4.1", "claude-sonnet-4", "deepseek-r1"])
    state.set_mode("brainstorm")

    added = state.submit("  ایده بده  ")

    assert [m.model for m in added] == ["gpt-4.1", "claude-sonnet-4", "deepseek-r1"]
    assert state.messages[0].role == "user"
    assert state.messages[0].content == "ایده بده"
    assert [m.role for m in state.messages[1:]] == ["assistant"] * 3
    assert all(m.degraded for m in added)
    assert state.user["credits"] == 50 - (5 + 4 + 3)
    # 서버 잔액도 같이 차감됨
    assert client.get(f"/api/users/{user['id']}").json()["credits"] == 38


def test_submit_sends_previous_turns_as_history(state):
    _login(state)
    state.submit("first")
    state.submit("second")
    assert [m.content for m in state.messages if m.role == "user"] == ["first", "second"]
    assert len(state.messages) == 4


def test_blank_input_is_ignored(state):
    _login(state)
    assert state.submit("   ") == []
    assert state.messages == []


def test_failure_keeps_user_message_and_adds_one_error():
    def handler(request: httpx.Request):
        if request.url.path == "/api/chat":
            return httpx.Response(500, json={"error": "خطا در پردازش پیام"})
        raise AssertionError(request.url.path)

    state = ChatState(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"))
    state.user = {"id": "u1", "credits": 10}

    assert state.submit("hi") == []
    assert [m.role for m in state.messages] == ["user", "assistant"]
    assert state.messages[1].content == GENERIC_ERROR_TEXT
    assert state.user["credits"] == 10
    assert state.is_loading is False


def test_transport_failure_adds_generic_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    state = ChatState(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"))
    state.user = {"id": "u1", "credits": 10}

    state.submit("hi")
    assert [m.content for m in state.messages] == ["hi", GENERIC_ERROR_TEXT]


def test_insufficient_credits_message():
    def handler(request):
        return httpx.Response(402, json={"error": "insufficient_credits"})

    state = ChatState(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"))
    state.user = {"id": "u1", "credits": 0}

    state.submit("hi")
    assert state.messages[-1].content == INSUFFICIENT_CREDITS_TEXT


def test_roundtable_submit(state):
    _login(state)
    state.set_selected_personas(["naval-ravikant", "ray-dalio"])

    added = state.submit_roundtable("ثروت")
    assert [m.persona for m in added] == ["naval-ravikant", "ray-dalio"]
    assert state.user["credits"] == 44
    assert added[0].as_history() == {"role": "persona", "content": added[0].content}


def test_roundtable_with_one_persona_adds_error(state):
    _login(state)
    state.set_selected_personas(["naval-ravikant"])
    assert state.submit_roundtable("hi") == []
    assert [m.content for m in state.messages] == ["hi", GENERIC_ERROR_TEXT]
    assert state.user["credits"] == 50


def test_logout_clears_state(state):
    _login(state)
    state.submit("hi")
    state.logout()
    assert state.user is None
    assert state.messages == []
