import os
import tempfile

# Settings are read at import time; point them at test values first.
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="foodies-uploads-")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from foodies_backend.config.database import build_engine, build_sessionmaker, get_db, init_db  # noqa: E402
from foodies_backend.main import app  # noqa: E402
from foodies_backend.models import Area, Category, Ingredient, Testimonial  # noqa: E402

CATEGORIES = ["Soup", "Dessert", "Breakfast"]
AREAS = ["Ukrainian", "Italian"]
INGREDIENTS = ["Potato", "Carrot", "Sweet Potato", "Salt"]


@pytest.fixture
async def engine():
    # one shared in-memory database per test
    eng = build_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def lookups(session_factory):
    """Seed categories, areas and ingredients. Returns {name: id} per table."""
    async with session_factory() as session:
        categories = [Category(name=n) for n in CATEGORIES]
        areas = [Area(name=n) for n in AREAS]
        ingredients = [Ingredient(name=n) for n in INGREDIENTS]
        session.add_all(categories + areas + ingredients)
        await session.commit()
        return {
            "categories": {c.name: c.id for c in categories},
            "areas": {a.name: a.id for a in areas},
            "ingredients": {i.name: i.id for i in ingredients},
        }


@pytest.fixture
def count_rows(session_factory):
    async def _count(model, *where) -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model).where(*where))
            return int(result.scalar_one())

    return _count


@pytest.fixture
def add_testimonial(session_factory):
    async def _add(owner_id: int, text: str) -> None:
        async with session_factory() as session:
            session.add(Testimonial(owner_id=owner_id, testimonial=text))
            await session.commit()

    return _add


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client, name="Alice", email="alice@example.com", password="secret123"):
    res = await client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert res.status_code == 201, res.text
    data = res.json()["data"]
    return data["token"], data["user"]["id"]


async def create_recipe(client, token, **overrides):
    body = {
        "title": "Soup",
        "instructions": "Boil everything for an hour.",
        "category": "Soup",
        "area": "Ukrainian",
        "time": 60,
        "ingredients": [],
    }
    body.update(overrides)
    res = await client.post("/api/recipes", json=body, headers=auth(token))
    assert res.status_code == 201, res.text
    return res.json()["data"]["id"]
