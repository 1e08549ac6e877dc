import pytest
from conftest import auth, create_recipe, register

from foodies_backend.models import UserFavoriteRecipe


@pytest.fixture
async def recipe_id(client, lookups):
    token, _ = await register(client, name="Owner", email="owner@example.com")
    return await create_recipe(client, token, title="Varenyky")


@pytest.fixture
async def fan(client):
    token, _ = await register(client, name="Fan", email="fan@example.com")
    return token


async def test_favorite_shows_in_favorites_list(client, recipe_id, fan):
    res = await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Recipe added to favorites"}

    res = await client.get("/api/recipes/favorites", headers=auth(fan))
    assert res.status_code == 200
    data = res.json()["data"]
    assert [r["id"] for r in data["recipes"]] == [recipe_id]
    assert data["recipes"][0]["owner_name"] == "Owner"
    assert data["recipes"][0]["favorited_at"]
    assert data["pagination"]["totalItems"] == 1

    detail = await client.get(f"/api/recipes/{recipe_id}")
    assert detail.json()["data"]["favoritesCount"] == 1


async def test_favorite_twice_is_rejected(client, recipe_id, fan, count_rows):
    await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    res = await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    assert res.status_code == 400
    assert res.json()["message"] == "Recipe already in favorites"
    assert await count_rows(UserFavoriteRecipe) == 1


async def test_favorite_missing_recipe(client, fan):
    res = await client.post("/api/recipes/4040/favorite", headers=auth(fan))
    assert res.status_code == 404
    assert res.json()["message"] == "Recipe not found"


async def test_unfavorite(client, recipe_id, fan):
    await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    res = await client.delete(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    assert res.status_code == 200
    assert res.json()["message"] == "Recipe removed from favorites"

    res = await client.get("/api/recipes/favorites", headers=auth(fan))
    assert res.json()["data"]["recipes"] == []


async def test_unfavorite_never_favorited(client, recipe_id, fan):
    res = await client.delete(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))
    assert res.status_code == 404
    assert res.json()["message"] == "Recipe not found in favorites"


async def test_favorites_are_per_user(client, recipe_id, fan):
    other, _ = await register(client, name="Other", email="other@example.com")
    await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))

    res = await client.get("/api/recipes/favorites", headers=auth(other))
    assert res.json()["data"]["recipes"] == []
    assert res.json()["data"]["pagination"]["totalPages"] == 0


async def test_deleting_recipe_drops_favorites(client, lookups, fan, count_rows):
    owner, _ = await register(client, name="Chef", email="chef@example.com")
    recipe_id = await create_recipe(client, owner, title="Holubtsi")
    await client.post(f"/api/recipes/{recipe_id}/favorite", headers=auth(fan))

    await client.delete(f"/api/recipes/{recipe_id}", headers=auth(owner))
    assert await count_rows(UserFavoriteRecipe) == 0


async def test_favorites_requires_token(client):
    res = await client.get("/api/recipes/favorites")
    assert res.status_code == 401
