#!/usr/bin/env python3
"""
Seed the restaurants table.

Replaces every restaurant in the configured database with the records from
a JSON file (a list of restaurant objects), or with the built-in catalog
when no file is given.

Usage:
    python scripts/seed_restaurants.py [path/to/restaurants.json]
"""
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from rapideat.core.config import settings
from rapideat.core.database import dispose_engine, get_session_factory, init_db
from rapideat.models.restaurant import Restaurant, RestaurantRead
from rapideat.services.restaurants import SAMPLE_RESTAURANTS


def load_records(argv):
    if len(argv) > 1:
        path = Path(argv[1])
        print(f"Reading restaurants from {path}")
        return json.loads(path.read_text(encoding="utf-8"))
    print("Using the built-in restaurant catalog")
    return SAMPLE_RESTAURANTS


async def seed(records) -> int:
    await init_db()
    async with get_session_factory()() as session:
        await session.execute(delete(Restaurant))
        for record in records:
            # Validate through the read schema so bad files fail before insert
            item = RestaurantRead.model_validate(record)
            restaurant = Restaurant.model_validate(item.model_dump(exclude={"id"}, mode="json"))
            session.add(restaurant)
        await session.commit()
    await dispose_engine()
    return len(records)


def main(argv) -> int:
    if not settings.has_database_config:
        print("Missing DATABASE_URL. Please set it before running the seed script.")
        return 1

    print("=" * 60)
    print("SEED RESTAURANTS")
    print("=" * 60)

    records = load_records(argv)
    count = asyncio.run(seed(records))
    print(f"Seeded {count} restaurants into {settings.restaurants_table}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
