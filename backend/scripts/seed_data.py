#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates sample projects, image records and bookings.
"""

import asyncio
import sys
from pathlib import Path
from datetime import date, datetime, timedelta

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.database import AsyncSessionLocal, dispose_engine, init_models
from src.models import Booking, Image, Project


async def create_tables():
    """Create all database tables"""
    await init_models()
    print("✓ Database tables created")


async def seed_data():
    """Seed the database with sample data"""
    now = datetime.utcnow()

    async with AsyncSessionLocal() as session:
        try:
            kitchen = Project(
                title="Kitchen Remodel",
                description="Full gut and remodel with custom cabinetry",
                owner_name="John Smithson",
                location="Austin, TX",
                completion_date=date(2024, 5, 17),
                created_at=now - timedelta(days=30),
            )
            deck = Project(
                title="Backyard Deck",
                description="Composite deck with built-in lighting",
                owner_name="Maria Jones",
                location="Round Rock, TX",
                completion_date=date(2024, 8, 2),
                created_at=now - timedelta(days=10),
            )
            addition = Project(
                title="Garage Addition",
                description="Two-car garage with loft storage",
                owner_name="Sam Carter",
                location="Austin, TX",
                completion_date=None,
                created_at=now,
            )
            session.add_all([kitchen, deck, addition])
            await session.flush()
            print("✓ Created projects")

            images = [
                Image(
                    project_id=kitchen.id,
                    image_url=f"https://example-bucket.s3.us-east-1.amazonaws.com/projects/{kitchen.id}/kitchen-{n}.jpg",
                )
                for n in range(1, 4)
            ]
            images.append(
                Image(
                    project_id=deck.id,
                    image_url=f"https://example-bucket.s3.us-east-1.amazonaws.com/projects/{deck.id}/deck-1.jpg",
                )
            )
            session.add_all(images)
            print("✓ Created image records")

            session.add(
                Booking(
                    name="Alex Doe",
                    email="alex.doe@example.com",
                    phone="555-0100",
                    location="Georgetown, TX",
                    message="Looking for a quote on a bathroom refresh.",
                )
            )
            print("✓ Created bookings")

            await session.commit()
            print("\n✓ Database seeded successfully!")

        except Exception as e:
            await session.rollback()
            print(f"✗ Error seeding database: {e}")
            raise


async def main():
    """Main seeding function"""
    print("Starting database seeding...\n")
    try:
        await create_tables()
        await seed_data()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
