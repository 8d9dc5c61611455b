"""
Seed the database with demo queue entries.

Run with: python -m scripts.seed_data
"""

import asyncio

from waitlist.config import get_settings
from waitlist.database import build_engine, build_session_maker, init_db
from waitlist.services.queue_service import QueueService


DEMO_CUSTOMERS = [
    {"name": "Alice", "phone": "0912-000-001"},
    {"name": "Bob", "phone": None},
    {"name": "Carol", "phone": "0912-000-003"},
    {"name": "Dave", "phone": None},
]


async def seed_queue(service: QueueService) -> None:
    """Add demo customers unless the queue already has active entries."""
    existing = await service.list_active()
    if existing:
        print(f"  ✓ Queue already has {len(existing)} active entries, skipping")
        return

    for customer in DEMO_CUSTOMERS:
        outcome = await service.join(customer["name"], customer["phone"])
        print(f"  + Created: #{outcome.value.id} {outcome.value.name}")


async def main():
    """Main entry point."""
    settings = get_settings()

    print("=" * 50)
    print(f"Seeding {settings.app_name} Database")
    print("=" * 50)

    print("\nInitializing database...")
    engine = build_engine(settings)
    await init_db(engine)

    print("\nSeeding demo entries...")
    session_maker = build_session_maker(engine)
    async with session_maker() as session:
        await seed_queue(QueueService(session))

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
