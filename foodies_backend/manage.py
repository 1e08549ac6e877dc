"""Schema and seed-data commands.

    python -m foodies_backend.manage create
    python -m foodies_backend.manage drop
    python -m foodies_backend.manage seed --data-dir ./foodies

Seed files are the exported JSON collections (categories.json, areas.json,
ingredients.json, users.json, recipes.json, testimonials.json). Documents
reference each other by `{"$oid": ...}`; rows that already exist (same
unique name/email) are left alone, so seeding can be re-run.
"""
import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config.database import AsyncSessionLocal, drop_db, engine, init_db
from .config.log import setup_logging
from .middleware.jwt import hash_password
from .models import Area, Category, Ingredient, Recipe, RecipeIngredient, Testimonial, User

logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"
DEFAULT_RECIPE_TIME = 30


def _oid(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("$oid")
    return value if isinstance(value, str) else None


def _load(data_dir: Path, name: str) -> list[dict]:
    path = data_dir / name
    if not path.exists():
        logger.info("Skipping %s (not found)", path)
        return []
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


async def _seed_named(db: AsyncSession, model, docs: list[dict]) -> dict[str, int]:
    """Insert lookup rows by unique name. Returns {oid or name: id}."""
    existing = {name: id_ for id_, name in (await db.execute(select(model.id, model.name))).all()}
    by_key: dict[str, int] = {}
    for doc in docs:
        name = (doc.get("name") or "").strip()
        if not name:
            continue
        if name not in existing:
            row = model(name=name)
            if model is Ingredient:
                row.description = doc.get("desc") or doc.get("description")
                row.img = doc.get("img")
            db.add(row)
            await db.flush()
            existing[name] = row.id
        by_key[_oid(doc.get("_id")) or name] = existing[name]
        by_key[name] = existing[name]
    logger.info("%s: %d rows available", model.__tablename__, len(existing))
    return by_key


async def _seed_users(db: AsyncSession, docs: list[dict]) -> dict[str, int]:
    existing = {email: id_ for id_, email in (await db.execute(select(User.id, User.email))).all()}
    by_oid: dict[str, int] = {}
    password = hash_password(SEED_PASSWORD) if docs else ""
    for doc in docs:
        email = (doc.get("email") or "").strip().lower()
        if not email:
            continue
        if email not in existing:
            user = User(name=doc.get("name") or email, email=email, password=password, avatar=doc.get("avatar"))
            db.add(user)
            await db.flush()
            existing[email] = user.id
        oid = _oid(doc.get("_id"))
        if oid:
            by_oid[oid] = existing[email]
    logger.info("users: %d rows available", len(existing))
    return by_oid


async def _seed_recipes(
    db: AsyncSession,
    docs: list[dict],
    categories: dict[str, int],
    areas: dict[str, int],
    ingredients: dict[str, int],
    users: dict[str, int],
) -> int:
    created = 0
    for doc in docs:
        title = (doc.get("title") or "").strip()
        owner_id = users.get(_oid(doc.get("owner")) or "")
        if not title or owner_id is None:
            continue
        found = await db.execute(select(Recipe.id).where(Recipe.title == title, Recipe.owner_id == owner_id))
        if found.first():
            continue
        try:
            time = int(doc.get("time") or DEFAULT_RECIPE_TIME)
        except (TypeError, ValueError):
            time = DEFAULT_RECIPE_TIME
        recipe = Recipe(
            title=title,
            description=doc.get("description"),
            instructions=doc.get("instructions") or "",
            thumb=doc.get("thumb"),
            time=time,
            category_id=categories.get(doc.get("category") or ""),
            area_id=areas.get(doc.get("area") or ""),
            owner_id=owner_id,
        )
        db.add(recipe)
        await db.flush()
        seen: set[int] = set()
        for item in doc.get("ingredients") or []:
            ingredient_id = ingredients.get(_oid(item.get("id")) or "")
            if ingredient_id is None or ingredient_id in seen:
                continue
            seen.add(ingredient_id)
            db.add(RecipeIngredient(recipe_id=recipe.id, ingredient_id=ingredient_id, measure=item.get("measure") or ""))
        created += 1
    await db.flush()
    logger.info("recipes: %d created", created)
    return created


async def _seed_testimonials(db: AsyncSession, docs: list[dict], users: dict[str, int]) -> int:
    created = 0
    for doc in docs:
        text = (doc.get("testimonial") or "").strip()
        owner_id = users.get(_oid(doc.get("owner")) or "")
        if not text or owner_id is None:
            continue
        found = await db.execute(
            select(Testimonial.id).where(Testimonial.testimonial == text, Testimonial.owner_id == owner_id)
        )
        if found.first():
            continue
        db.add(Testimonial(testimonial=text, owner_id=owner_id))
        created += 1
    await db.flush()
    logger.info("testimonials: %d created", created)
    return created


async def seed(db: AsyncSession, data_dir: Path) -> None:
    """Load every seed collection found in `data_dir` into the session."""
    categories = await _seed_named(db, Category, _load(data_dir, "categories.json"))
    areas = await _seed_named(db, Area, _load(data_dir, "areas.json"))
    ingredients = await _seed_named(db, Ingredient, _load(data_dir, "ingredients.json"))
    users = await _seed_users(db, _load(data_dir, "users.json"))
    await _seed_recipes(db, _load(data_dir, "recipes.json"), categories, areas, ingredients, users)
    await _seed_testimonials(db, _load(data_dir, "testimonials.json"), users)


async def _run(args: argparse.Namespace) -> None:
    try:
        if args.command == "create":
            await init_db()
            logger.info("Tables created")
        elif args.command == "drop":
            await drop_db()
            logger.info("Tables dropped")
        elif args.command == "seed":
            await init_db()
            async with AsyncSessionLocal() as session:
                async with session.begin():
                    await seed(session, Path(args.data_dir))
            logger.info("Database seeded")
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="foodies_backend.manage", description="Foodies database commands")
    parser.add_argument("command", choices=["create", "drop", "seed"])
    parser.add_argument("--data-dir", default="foodies", help="directory with the seed JSON files")
    args = parser.parse_args(argv)
    setup_logging()
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
