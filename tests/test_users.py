from pathlib import Path

import pytest
from conftest import auth, create_recipe, register

from foodies_backend.config.settings import settings
from foodies_backend.models import UserFollow

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def alice(client):
    return await register(client, name="Alice", email="alice@example.com")


@pytest.fixture
async def bob(client):
    return await register(client, name="Bob", email="bob@example.com")


async def test_own_profile_counts(client, lookups, alice, bob):
    token, user_id = alice
    bob_token, bob_id = bob
    recipe_id = await create_recipe(client, token, title="Kulish")
    await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(token))
    await client.post(f"/api/users/{bob_id}/follow", headers=auth(token))
    await client.post(f"/api/users/{user_id}/follow", headers=auth(bob_token))

    res = await client.get("/api/users/profile", headers=auth(token))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == user_id
    assert data["email"] == "alice@example.com"
    assert "password" not in data
    assert (data["recipesCount"], data["favoritesCount"], data["followersCount"], data["followingCount"]) == (
        1,
        1,
        1,
        1,
    )


async def test_other_profile(client, lookups, alice, bob):
    token, _ = alice
    bob_token, bob_id = bob
    await create_recipe(client, bob_token, title="Bob's stew")

    res = await client.get(f"/api/users/{bob_id}", headers=auth(token))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["name"] == "Bob"
    assert data["recipesCount"] == 1
    assert data["followersCount"] == 0
    assert "favoritesCount" not in data


async def test_other_profile_not_found(client, alice):
    token, _ = alice
    res = await client.get("/api/users/777", headers=auth(token))
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


async def test_update_profile(client, alice):
    token, _ = alice
    res = await client.patch(
        "/api/users/profile",
        json={"name": "Alicia", "email": "Alicia@Example.com"},
        headers=auth(token),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Profile successfully updated"
    assert body["data"]["name"] == "Alicia"
    assert body["data"]["email"] == "alicia@example.com"

    login = await client.post("/api/auth/login", json={"email": "alicia@example.com", "password": "secret123"})
    assert login.status_code == 200


async def test_update_profile_email_taken(client, alice, bob):
    token, _ = alice
    res = await client.patch("/api/users/profile", json={"email": "bob@example.com"}, headers=auth(token))
    assert res.status_code == 400
    assert res.json()["message"] == "Email is already in use"


async def test_update_profile_needs_a_field(client, alice):
    token, _ = alice
    res = await client.patch("/api/users/profile", json={}, headers=auth(token))
    assert res.status_code == 400
    assert res.json()["message"] == "Provide a name or email to update"


async def test_avatar_upload(client, alice):
    token, _ = alice
    res = await client.put(
        "/api/users/avatar",
        files={"avatar": ("me.png", PNG_BYTES, "image/png")},
        headers=auth(token),
    )
    assert res.status_code == 200, res.text
    avatar = res.json()["data"]["avatar"]
    assert avatar.startswith("/uploads/avatars/avatar-")
    assert avatar.endswith(".png")

    stored = Path(settings.upload_dir) / "avatars" / avatar.rsplit("/", 1)[-1]
    assert stored.read_bytes() == PNG_BYTES

    served = await client.get(avatar)
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    profile = await client.get("/api/users/profile", headers=auth(token))
    assert profile.json()["data"]["avatar"] == avatar


async def test_avatar_wrong_type(client, alice):
    token, _ = alice
    res = await client.put(
        "/api/users/avatar",
        files={"avatar": ("notes.txt", b"hello", "text/plain")},
        headers=auth(token),
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Only images are allowed!"


async def test_avatar_too_large(client, alice, monkeypatch):
    token, _ = alice
    monkeypatch.setattr(settings, "max_upload_size", 16)
    res = await client.put(
        "/api/users/avatar",
        files={"avatar": ("big.png", PNG_BYTES, "image/png")},
        headers=auth(token),
    )
    assert res.status_code == 400
    assert res.json()["message"] == "File too large"


async def test_avatar_missing_file(client, alice):
    token, _ = alice
    res = await client.put("/api/users/avatar", headers=auth(token))
    assert res.status_code == 400
    assert res.json()["message"] == "File not provided"


async def test_follow_and_lists(client, alice, bob):
    token, user_id = alice
    bob_token, bob_id = bob

    res = await client.post(f"/api/users/{bob_id}/follow", headers=auth(token))
    assert res.status_code == 200
    assert res.json()["message"] == "Successfully followed user"

    following = await client.get("/api/users/following", headers=auth(token))
    assert [u["id"] for u in following.json()["data"]] == [bob_id]

    followers = await client.get("/api/users/followers", headers=auth(bob_token))
    assert [u["name"] for u in followers.json()["data"]] == ["Alice"]

    assert (await client.get("/api/users/followers", headers=auth(token))).json()["data"] == []


async def test_follow_self(client, alice, count_rows):
    token, user_id = alice
    res = await client.post(f"/api/users/{user_id}/follow", headers=auth(token))
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot follow yourself"
    assert await count_rows(UserFollow) == 0


async def test_follow_missing_user(client, alice):
    token, _ = alice
    res = await client.post("/api/users/4242/follow", headers=auth(token))
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


async def test_follow_twice(client, alice, bob, count_rows):
    token, _ = alice
    _, bob_id = bob
    await client.post(f"/api/users/{bob_id}/follow", headers=auth(token))
    res = await client.post(f"/api/users/{bob_id}/follow", headers=auth(token))
    assert res.status_code == 400
    assert res.json()["message"] == "You are already following this user"
    assert await count_rows(UserFollow) == 1


async def test_unfollow(client, alice, bob):
    token, _ = alice
    _, bob_id = bob
    await client.post(f"/api/users/{bob_id}/follow", headers=auth(token))

    res = await client.delete(f"/api/users/{bob_id}/follow", headers=auth(token))
    assert res.status_code == 200
    assert res.json()["message"] == "Successfully unfollowed user"

    again = await client.delete(f"/api/users/{bob_id}/follow", headers=auth(token))
    assert again.status_code == 404
    assert again.json()["message"] == "You are not following this user"
