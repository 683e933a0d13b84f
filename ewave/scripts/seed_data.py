import asyncio
import logging

from sqlalchemy import select

import ewave.models  # noqa: F401
from ewave.auth.passwords_handler import hash_password_async
from ewave.core.db import AsyncSessionLocal, engine, init_models
from ewave.core.logging import setup_logging
from ewave.models import User, Vehicle

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("alice", "alice-password"),
    ("bob", "bob-password"),
]

DEMO_VEHICLES = [
    dict(model_name="Tesla Model 3", make="Tesla", year=2023, price=38990.00, availability=4,
         tags="sedan,electric", description="Compact electric sedan with long range battery."),
    dict(model_name="Tesla Model Y", make="Tesla", year=2023, price=43990.00, availability=2,
         tags="suv,electric", description="Electric crossover with seating for seven."),
    dict(model_name="Rivian R1T", make="Rivian", year=2022, price=73000.00, availability=1,
         tags="truck,electric,offroad", description="Adventure pickup with quad motors."),
    dict(model_name="Hyundai Ioniq 6", make="Hyundai", year=2024, price=42450.00, availability=3,
         tags="sedan,electric", description="Streamlined EV sedan with fast charging."),
    dict(model_name="Toyota Prius", make="Toyota", year=2023, price=27950.00, availability=0,
         tags="hatchback,hybrid", description="Efficient hybrid hatchback."),
    dict(model_name="Ford Mustang Mach-E", make="Ford", year=2023, price=42995.00, availability=2,
         tags="suv,electric", description="Sporty electric SUV."),
]


async def seed():
    await init_models()
    async with AsyncSessionLocal() as db:
        existing = (await db.execute(select(Vehicle.model_name))).scalars().all()
        db.add_all(
            Vehicle(**data) for data in DEMO_VEHICLES if data["model_name"] not in existing
        )

        usernames = (await db.execute(select(User.username))).scalars().all()
        for username, password in DEMO_USERS:
            if username not in usernames:
                db.add(User(username=username, password=await hash_password_async(password)))

        await db.commit()
    await engine.dispose()
    logger.info("Seed data inserted successfully")

if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
