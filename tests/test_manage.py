import json

import pytest

from foodies_backend.manage import seed
from foodies_backend.models import Area, Category, Ingredient, Recipe, RecipeIngredient, Testimonial, User

SEED = {
    "categories.json": [{"_id": {"$oid": "c1"}, "name": "Soup"}, {"_id": {"$oid": "c2"}, "name": "Dessert"}],
    "areas.json": [{"_id": {"$oid": "a1"}, "name": "Ukrainian"}],
    "ingredients.json": [
        {"_id": {"$oid": "i1"}, "name": "Beetroot", "desc": "Root vegetable", "img": "https://img/beet.png"},
        {"_id": {"$oid": "i2"}, "name": "Potato"},
    ],
    "users.json": [
        {"_id": {"$oid": "u1"}, "name": "Olena", "email": "Olena@Example.com", "avatar": None},
    ],
    "recipes.json": [
        {
            "_id": {"$oid": "r1"},
            "title": "Borscht",
            "category": "Soup",
            "area": "Ukrainian",
            "instructions": "Boil beets, add potatoes.",
            "time": "90",
            "owner": {"$oid": "u1"},
            "ingredients": [
                {"id": "i1", "measure": "2"},
                {"id": "i2", "measure": "3"},
                {"id": "i2", "measure": "1"},
                {"id": "missing", "measure": "1"},
            ],
        },
        {"title": "Orphan", "owner": {"$oid": "nobody"}, "instructions": "Skipped."},
    ],
    "testimonials.json": [{"owner": {"$oid": "u1"}, "testimonial": "Lovely site"}],
}


@pytest.fixture
def data_dir(tmp_path):
    for name, docs in SEED.items():
        (tmp_path / name).write_text(json.dumps(docs), encoding="utf-8")
    return tmp_path


async def _seed(session_factory, data_dir):
    async with session_factory() as session:
        async with session.begin():
            await seed(session, data_dir)


async def test_seed_loads_collections(session_factory, data_dir, count_rows):
    await _seed(session_factory, data_dir)

    assert await count_rows(Category) == 2
    assert await count_rows(Area) == 1
    assert await count_rows(Ingredient) == 2
    assert await count_rows(User, User.email == "olena@example.com") == 1
    assert await count_rows(Recipe) == 1
    # repeated and unknown ingredient references are dropped
    assert await count_rows(RecipeIngredient) == 2
    assert await count_rows(Testimonial) == 1


async def test_seed_is_idempotent(session_factory, data_dir, count_rows):
    await _seed(session_factory, data_dir)
    await _seed(session_factory, data_dir)

    assert await count_rows(Category) == 2
    assert await count_rows(User) == 1
    assert await count_rows(Recipe) == 1
    assert await count_rows(Testimonial) == 1


async def test_seeded_user_can_log_in(client, session_factory, data_dir):
    await _seed(session_factory, data_dir)
    res = await client.post("/api/auth/login", json={"email": "olena@example.com", "password": "password123"})
    assert res.status_code == 200

    search = await client.get("/api/recipes/search", params={"ingredient": "beet"})
    recipe = search.json()["data"]["recipes"][0]
    assert recipe["title"] == "Borscht"
    assert recipe["category"] == "Soup"
    assert recipe["time"] == 90


async def test_missing_files_are_skipped(session_factory, tmp_path, count_rows):
    await _seed(session_factory, tmp_path)
    assert await count_rows(Recipe) == 0
