from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from src import container
from src.web import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("ADMIN_LOGINS", '["admin@school.example"]')
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    for name in ("_engine", "_event_bus", "_interactor", "_auth_service"):
        monkeypatch.setattr(container, name, None)
    return create_app()


async def _login(client):
    response = await client.post(
        "/api/auth/login",
        json={"role": "admin", "login": "admin@school.example", "password": "s3cret"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_api_requires_login(app):
    client = app.test_client()

    response = await client.get("/api/chats")
    assert response.status_code == 401

    health = await client.get("/health")
    assert health.status_code == 200
    assert (await health.get_json())["authenticated"] is False


@pytest.mark.asyncio
async def test_login_errors(app):
    client = app.test_client()

    bad_role = await client.post("/api/auth/login", json={"role": "janitor", "login": "x", "password": "y"})
    assert bad_role.status_code == 400

    teacher = await client.post("/api/auth/login", json={"role": "teacher", "login": "x", "password": "y"})
    assert teacher.status_code == 403
    assert (await teacher.get_json())["error"] == "role_not_supported"

    wrong = await client.post(
        "/api/auth/login", json={"role": "admin", "login": "admin@school.example", "password": "nope"}
    )
    assert wrong.status_code == 401


@pytest.mark.asyncio
async def test_select_group_and_topics(app):
    client = app.test_client()
    await _login(client)

    chats = (await (await client.get("/api/chats")).get_json())["chats"]
    assert [c["id"] for c in chats] == ["4", "1", "2", "3"]
    assert chats[1]["unread_count"] == 3
    assert chats[1]["type"] == "group"

    selected = await client.post("/api/chats/1/select")
    assert (await selected.get_json())["cursor"]["selected_topic_id"] == "1-important"

    topic = await client.post("/api/topics/1-homework/select")
    assert (await topic.get_json())["group_unread"] == 0

    foreign = await client.post("/api/topics/3-general/select")
    assert foreign.status_code == 404

    missing = await client.post("/api/chats/99/select")
    assert missing.status_code == 404

    topics = await (await client.get("/api/chats/1/topics")).get_json()
    assert [t["name"] for t in topics["topics"]] == ["Important", "Homework", "General"]


@pytest.mark.asyncio
async def test_compose_send_and_react(app):
    client = app.test_client()
    await _login(client)
    await client.post("/api/chats/2/select")

    empty = await client.post("/api/messages")
    assert empty.status_code == 204

    await client.put("/api/draft", json={"text": "See attached"})
    upload = await client.post(
        "/api/draft/attachments",
        form={"kind": "file"},
        files={"files": FileStorage(BytesIO(b"x" * 2048), filename="marks.pdf", content_type="application/pdf")},
    )
    body = await upload.get_json()
    assert body["attached"] == 1
    assert body["draft"]["attachments"][0]["file_name"] == "marks.pdf"
    assert body["draft"]["attachments"][0]["file_size"] == "2 KB"

    sent = await client.post("/api/messages")
    assert sent.status_code == 201
    message = await sent.get_json()
    assert message["text"] == "See attached"
    assert message["is_own"] is True

    draft = await (await client.get("/api/draft")).get_json()
    assert draft == {"text": "", "attachments": []}

    reacted = await client.post(f"/api/messages/{message['id']}/reactions", json={"emoji": "👍"})
    assert (await reacted.get_json())["reactions"] == [{"emoji": "👍", "count": 1, "users": ["You"]}]

    unreacted = await client.post(f"/api/messages/{message['id']}/reactions", json={"emoji": "👍"})
    assert (await unreacted.get_json())["reactions"] == []

    missing = await client.post("/api/messages/999/reactions", json={"emoji": "👍"})
    assert missing.status_code == 404

    listing = await (await client.get("/api/messages")).get_json()
    assert listing["messages"][-1]["id"] == message["id"]


@pytest.mark.asyncio
async def test_remove_draft_attachment_route(app):
    client = app.test_client()
    await _login(client)
    await client.post("/api/chats/4/select")
    await client.post(
        "/api/draft/attachments",
        form={"kind": "file"},
        files={"files": FileStorage(BytesIO(b"abc"), filename="a.txt")},
    )

    out_of_range = await client.delete("/api/draft/attachments/3")
    assert len((await out_of_range.get_json())["attachments"]) == 1

    removed = await client.delete("/api/draft/attachments/0")
    assert (await removed.get_json())["attachments"] == []


@pytest.mark.asyncio
async def test_logout_resets_cursor(app):
    client = app.test_client()
    await _login(client)
    await client.post("/api/chats/4/select")

    await client.post("/api/auth/logout")
    assert (await client.get("/api/chats")).status_code == 401

    await _login(client)
    chats = await (await client.get("/api/chats")).get_json()
    assert chats["cursor"]["selected_chat_id"] is None
