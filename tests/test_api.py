"""End‑to‑end tests through the HTTP layer."""

import pytest
from httpx import AsyncClient

CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


async def register_and_login(client: AsyncClient, name="Jane Doe", email="jane@example.com") -> dict:
    response = await client.post(
        "/api/v1/auth/register", json={"name": name, "email": email, "password": "secret123"}
    )
    assert response.status_code == 201
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": "secret123"},
        headers={"User-Agent": CHROME_UA},
    )
    assert response.status_code == 200
    body = response.json()
    return {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/v1/users/profile"),
        ("get", "/api/v1/task/"),
        ("get", "/api/v1/tags/"),
        ("get", "/api/v1/event/"),
        ("get", "/api/v1/activates/"),
        ("get", "/api/v1/send/invites"),
    ],
)
async def test_protected_routes_require_token(client: AsyncClient, method, path):
    response = await client.request(method, path)
    assert response.status_code == 401
    assert response.json()["status"] == "error"


@pytest.mark.asyncio
async def test_token_of_unknown_user_is_rejected(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/users/profile", headers=auth_headers("ghost"))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_validation_errors_are_400(client: AsyncClient):
    response = await client.post("/api/v1/auth/register", json={"name": "Jane"})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["message"]

    response = await client.post(
        "/api/v1/auth/register", json={"name": "Jane", "email": "nope", "password": "secret123"}
    )
    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Invalid email format"}


@pytest.mark.asyncio
async def test_login_failure_is_401(client: AsyncClient):
    response = await client.post("/api/v1/auth/login", json={"email": "x@example.com", "password": "whatever"})
    assert response.status_code == 401
    assert response.json() == {"status": "error", "message": "Invalid email or password"}


@pytest.mark.asyncio
async def test_profile_and_login_activity(client: AsyncClient):
    jane = await register_and_login(client)

    profile = await client.get("/api/v1/users/profile", headers=jane["headers"])
    assert profile.status_code == 200
    assert profile.json()["email"] == "jane@example.com"
    assert "password" not in profile.json()

    feed = await client.get("/api/v1/activates/", headers=jane["headers"])
    assert feed.status_code == 200
    entry = feed.json()[0]
    assert entry["title"] == "Login Your Account"
    assert entry["dis"][0]["text"].startswith("Mac OS X")


@pytest.mark.asyncio
async def test_password_update_uses_client_field_names(client: AsyncClient):
    jane = await register_and_login(client)
    response = await client.patch(
        "/api/v1/users/update-password",
        json={"oldPassword": "secret123", "newPassword": "newsecret"},
        headers=jane["headers"],
    )
    assert response.status_code == 200
    response = await client.post("/api/v1/auth/login", json={"email": "jane@example.com", "password": "newsecret"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_search_and_sleipner(client: AsyncClient):
    jane = await register_and_login(client)
    bob = await register_and_login(client, name="Bob Stone", email="bob@example.com")

    found = await client.get(
        "/api/v1/users/search", params={"nameOremail": "STONE", "page": 1, "perPage": 5}, headers=jane["headers"]
    )
    assert found.status_code == 200
    assert [u["id"] for u in found.json()] == [bob["id"]]

    added = await client.post("/api/v1/users/sleipner", json={"id": bob["id"]}, headers=jane["headers"])
    assert added.status_code == 200
    contacts = await client.get("/api/v1/users/sleipner", headers=jane["headers"])
    assert [c["name"] for c in contacts.json()] == ["Bob Stone"]

    missing = await client.post("/api/v1/users/sleipner", json={"id": "nobody"}, headers=jane["headers"])
    assert missing.status_code == 404
    assert missing.json()["message"] == "Sleipner not found. Please check the provided ID"

    removed = await client.delete(f"/api/v1/users/sleipner/{bob['id']}", headers=jane["headers"])
    assert removed.json() == {"message": "Delete Successfully"}


@pytest.mark.asyncio
async def test_avatar_upload(client: AsyncClient, assets):
    jane = await register_and_login(client)
    response = await client.patch(
        "/api/v1/users/update-avatar",
        files={"profilePicture": ("me.png", b"\x89PNG...", "image/png")},
        headers=jane["headers"],
    )
    assert response.status_code == 200
    assert response.json()["avatar"]["200"]["url"] == assets.uploaded[1].url

    response = await client.patch(
        "/api/v1/users/update-avatar",
        files={"profilePicture": ("me.txt", b"text", "text/plain")},
        headers=jane["headers"],
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_tags_and_tasks_flow(client: AsyncClient):
    jane = await register_and_login(client)
    bob = await register_and_login(client, name="Bob", email="bob@example.com")

    tag = await client.patch(
        "/api/v1/tags/", json={"id": "t1", "name": "urgent", "color": "#f00"}, headers=jane["headers"]
    )
    assert tag.status_code == 200
    assert tag.json() == {"id": "t1", "name": "urgent", "color": "#f00"}

    created = await client.post(
        "/api/v1/task/",
        json={"name": "Report", "tags": ["t1"], "assigned_users": [bob["id"]]},
        headers=jane["headers"],
    )
    assert created.status_code == 201
    task = created.json()
    assert task["owner"]["id"] == jane["id"]
    assert task["tags"][0]["name"] == "urgent"

    bobs = await client.get("/api/v1/task/", headers=bob["headers"])
    assert [t["id"] for t in bobs.json()] == [task["id"]]

    updated = await client.patch(
        f"/api/v1/task/{task['id']}/status", json={"status": "In Process"}, headers=jane["headers"]
    )
    assert updated.json()["status"] == "In Process"

    bad = await client.patch(f"/api/v1/task/{task['id']}", json={"status": "Paused"}, headers=jane["headers"])
    assert bad.status_code == 400

    deleted = await client.delete(f"/api/v1/task/{task['id']}", headers=jane["headers"])
    assert deleted.status_code == 200
    gone = await client.get(f"/api/v1/task/{task['id']}", headers=jane["headers"])
    assert gone.status_code == 404

    removed = await client.delete("/api/v1/tags/t1", headers=jane["headers"])
    assert removed.json()["deleted"] is True


@pytest.mark.asyncio
async def test_event_flow(client: AsyncClient):
    jane = await register_and_login(client)
    created = await client.post(
        "/api/v1/event/",
        json={"title": "Sync", "date": "2024-3-15", "starttime": "09:00", "endtime": "09:30"},
        headers=jane["headers"],
    )
    assert created.status_code == 201
    event_id = created.json()["id"]

    invalid = await client.post("/api/v1/event/", json={"title": "Sync"}, headers=jane["headers"])
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "date, starttime are required fields."

    grouped = await client.get("/api/v1/event/", headers=jane["headers"])
    assert list(grouped.json()) == ["2024-3-15"]

    first = await client.delete(f"/api/v1/event/{event_id}", headers=jane["headers"])
    second = await client.delete(f"/api/v1/event/{event_id}", headers=jane["headers"])
    assert first.status_code == second.status_code == 200
    assert second.json() == {"deleted": False, "message": "Event already deleted"}


@pytest.mark.asyncio
async def test_invite_flow(client: AsyncClient, mailer):
    jane = await register_and_login(client)
    friend = await register_and_login(client, name="Friend", email="friend@example.com")

    sent = await client.post(
        "/api/v1/send/invite", json={"recipient_email": "friend@example.com"}, headers=jane["headers"]
    )
    assert sent.status_code == 201
    invite_id = sent.json()["id"]

    answered = await client.patch(
        f"/api/v1/send/invites/{invite_id}", json={"status": "accepted"}, headers=friend["headers"]
    )
    assert answered.json()["status"] == "accepted"

    mailer.fail = True
    failed = await client.post(
        "/api/v1/send/invite", json={"recipient_email": "other@example.com"}, headers=jane["headers"]
    )
    assert failed.status_code == 500
    assert failed.json()["status"] == "error"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: AsyncClient):
    response = await client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["status"] == "error"
