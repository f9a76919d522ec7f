"""
Seed script to populate the database with sample contacts.

Run with: python -m scripts.seed_data
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from app.database import close_db, get_session_factory, init_db
from app.models import Contact

logger = logging.getLogger(__name__)

SAMPLE_CONTACTS = [
    # (first, last, phone, email, category, active, age in days)
    ("Ana", "Lee", "555-0100", "ana@x.com", "work", True, 1),
    ("Bruno", "Costa", "555-0101", "bruno.costa@acme.io", "work", True, 3),
    ("Chen", "Wei", "555-0102", "chen.wei@acme.io", "client", True, 10),
    ("Dana", "Leeds", "555-0103", "dana@family.net", "family", True, 30),
    ("Emil", "Novak", "555-0104", "emil.novak@acme.io", "client", False, 45),
    ("Farah", "Khan", "555-0105", "farah@school.edu", "school", True, 2),
    ("Gus", "Olsen", "555-0106", "gus@family.net", "family", False, 90),
]


async def seed_contacts(session) -> int:
    """Insert sample contacts unless the table already has rows."""
    existing = (await session.execute(select(func.count(Contact.id)))).scalar()
    if existing:
        logger.info("Skipping seed, %s contacts already present", existing)
        return 0

    now = datetime.now(timezone.utc)
    for first, last, phone, email, category, active, age_days in SAMPLE_CONTACTS:
        session.add(
            Contact(
                first_name=first,
                last_name=last,
                phone_no=phone,
                email=email,
                category=category,
                is_active=active,
                creation_date=now - timedelta(days=age_days),
            )
        )
    await session.commit()
    return len(SAMPLE_CONTACTS)


async def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    await init_db()
    factory = get_session_factory()
    async with factory() as session:
        created = await seed_contacts(session)
    logger.info("Seeded %s contacts", created)

    await close_db()


if __name__ == "__main__":
    asyncio.run(main())
