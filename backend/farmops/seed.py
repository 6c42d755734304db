# backend/farmops/seed.py
#
# Dev fixtures: one user per role plus two fields.
#   python -m farmops.seed

import asyncio
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from farmops.core.auth import create_access_token
from farmops.core.database import AsyncSessionLocal, create_tables, engine
from farmops.core.logger import get_logger
from farmops.models import Field, User
from farmops.models.enums import Role

logger = get_logger("seed")

SEED_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, "farmops.local")

DEFAULT_USERS = [
    ("admin@farmops.local", "System Admin", Role.ADMIN),
    ("supervisor@farmops.local", "Field Supervisor", Role.SUPERVISOR),
    ("worker@farmops.local", "Farm Worker", Role.WORKER),
]

# (slug, name, crop, warning, critical)
DEFAULT_FIELDS = [
    ("field-a", "Field A", "Sugarcane", 10.0, 15.0),
    ("field-b", "Field B", "Sugarcane", 12.0, 18.0),
]


def seed_id(slug: str) -> str:
    return str(uuid.uuid5(SEED_NAMESPACE, slug))


async def seed(db: AsyncSession) -> list[User]:
    users = []
    for email, full_name, role in DEFAULT_USERS:
        user = await db.scalar(select(User).where(User.email == email))
        if not user:
            user = User(id=seed_id(email), email=email, full_name=full_name, role=role)
            db.add(user)
        users.append(user)

    for slug, name, crop, warning, critical in DEFAULT_FIELDS:
        if not await db.get(Field, seed_id(slug)):
            db.add(
                Field(
                    id=seed_id(slug),
                    name=name,
                    crop_type=crop,
                    warning_threshold=warning,
                    critical_threshold=critical,
                )
            )

    await db.commit()
    return users


async def main():
    await create_tables()

    async with AsyncSessionLocal() as db:
        users = await seed(db)

    logger.info("Seed completed", extra={"fields": [seed_id(f[0]) for f in DEFAULT_FIELDS]})
    for user in users:
        token = create_access_token({"id": user.id, "email": user.email, "role": user.role.value})
        print(f"{user.role.value:<10} {user.email:<28} {token}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
