"""WebSocket relay and HTTP chat endpoints through the FastAPI app."""

from conftest import FakeReplyGenerator
from services.relay.session_relay import FALLBACK_NOTICE, SessionRelay


def test_join_then_message_round_trip(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_chat", "sessionId": "abc"})
        ws.send_json({"type": "student_message", "content": "Which visa do I need?", "sessionId": "abc"})

        echo = ws.receive_json()
        reply = ws.receive_json()

    assert echo["type"] == "chat_message"
    assert echo["sender"] == "student"
    assert echo["message"] == "Which visa do I need?"
    assert "timestamp" in echo
    assert reply["sender"] == "ai_assistant"
    assert reply["message"] == "Reply to: Which visa do I need?"


def test_message_without_join_is_dropped_and_socket_stays_usable(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "student_message", "content": "Hello", "sessionId": "s1"})
        ws.send_text("this is not json")
        ws.send_text("[" * 100000)
        ws.send_json({"type": "join_chat", "sessionId": "s1"})
        ws.send_json({"type": "student_message", "content": "Second try", "sessionId": "s1"})

        echo = ws.receive_json()
        reply = ws.receive_json()

    assert echo["sender"] == "student"
    assert echo["message"] == "Second try"
    assert reply["sender"] == "ai_assistant"


def test_generator_failure_sends_fallback_notice(app, client):
    app.state.chat_relay = SessionRelay(FakeReplyGenerator(error=RuntimeError("boom")).generate)

    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_chat", "sessionId": "abc"})
        ws.send_json({"type": "student_message", "content": "Hello", "sessionId": "abc"})

        echo = ws.receive_json()
        notice = ws.receive_json()

    assert echo["sender"] == "student"
    assert notice["sender"] == "system"
    assert notice["message"] == FALLBACK_NOTICE


def test_sessions_are_isolated_between_sockets(client):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        first.send_json({"type": "join_chat", "sessionId": "s1"})
        second.send_json({"type": "join_chat", "sessionId": "s2"})
        first.send_json({"type": "student_message", "content": "for s1", "sessionId": "s1"})
        second.send_json({"type": "student_message", "content": "for s2", "sessionId": "s2"})

        first_frames = [first.receive_json(), first.receive_json()]
        second_frames = [second.receive_json(), second.receive_json()]

    assert [f["message"] for f in first_frames] == ["for s1", "Reply to: for s1"]
    assert [f["message"] for f in second_frames] == ["for s2", "Reply to: for s2"]


def test_disconnect_unregisters_session(app, client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_chat", "sessionId": "gone"})
        ws.send_json({"type": "student_message", "content": "ping", "sessionId": "gone"})
        ws.receive_json()
        ws.receive_json()
        assert "gone" in app.state.chat_relay.registry

    # the server-side handler unwinds after the client closes
    response = client.post("/api/chat/sessions/gone/messages", json={"message": "anyone there?"})
    assert response.json()["delivered"] is False


def test_agent_message_reaches_live_session(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join_chat", "sessionId": "s9"})
        ws.send_json({"type": "student_message", "content": "I need a human", "sessionId": "s9"})
        ws.receive_json()
        ws.receive_json()

        response = client.post(
            "/api/chat/sessions/s9/messages",
            json={"message": "Hi, I'm Maya from admissions.", "senderName": "Maya"},
        )
        frame = ws.receive_json()

    assert response.status_code == 200
    assert response.json() == {"sessionId": "s9", "delivered": True}
    assert frame["sender"] == "agent"
    assert frame["senderName"] == "Maya"
    assert frame["message"] == "Hi, I'm Maya from admissions."


def test_agent_message_rejects_student_sender(client):
    response = client.post("/api/chat/sessions/s1/messages", json={"message": "hi", "sender": "student"})
    assert response.status_code == 422


def test_chat_endpoint_returns_reply(client):
    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 200
    assert response.json() == {"message": "Reply to: Hello"}


def test_chat_endpoint_falls_back_on_error(app, client):
    app.state.reply_generator = FakeReplyGenerator(error=RuntimeError("down"))

    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.json() == {"message": "Sorry, I encountered an error. Please try again later."}


def test_edubot_returns_quick_replies(app, client):
    ok = client.post("/api/edubot/chat", json={"message": "Find a scholarship", "context": "edubot_assistance"})
    assert ok.json()["response"] == "Reply to: Find a scholarship"
    assert "Find a scholarship" in ok.json()["quickReplies"]

    app.state.reply_generator = FakeReplyGenerator(error=RuntimeError("down"))
    failed = client.post("/api/edubot/chat", json={"message": "Hello"})
    assert failed.json() == {"response": FALLBACK_NOTICE, "quickReplies": []}
