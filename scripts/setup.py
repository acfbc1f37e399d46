#!/usr/bin/env python3
"""Setup script for the travel admin API."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from sqlalchemy import func, select

from travel_admin.core.config import settings
from travel_admin.core.database import async_session_factory, close_db
from travel_admin.models import Hotel, Package
from travel_admin.services.admin_service import AdminCredentialStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def migrate_database():
    """Bring the schema up to the latest revision."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def seed_data():
    """Create the admin account and a little sample content when the store is empty."""
    async with async_session_factory() as db:
        created = await AdminCredentialStore(db).ensure_seeded(settings.admin_username, settings.admin_password)
        if not created:
            logger.info("Admin account already exists, skipping...")

        existing_packages = await db.scalar(select(func.count()).select_from(Package))
        if existing_packages:
            logger.info("Sample data already exists, skipping...")
            return

        try:
            db.add(Package(
                title="Goa Beach Escape",
                price=15000.0,
                days="4 Days / 3 Nights",
                short_description="Sun, sand and seafood on India's west coast",
                highlights=["Baga beach", "Old Goa churches", "Dudhsagar falls"],
                inclusions=["Breakfast", "Airport transfers"],
                pricing={"adult": 15000, "child": 9000},
                activities=[{"title": "Sunset cruise", "images": []}],
            ))
            db.add(Hotel(
                title="Sea View Resort",
                price="4500",
                per_person="per night",
                location="Calangute, Goa",
                reviews=4.3,
                popular_amenities=["Pool", "Spa", "Free Wi-Fi"],
            ))
            await db.commit()
            logger.info("Sample data created successfully!")
        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create sample data: {e}")
            raise


async def seed_and_close():
    try:
        await seed_data()
    finally:
        await close_db()


def main():
    """Main setup function."""
    logger.info("Starting travel admin API setup...")

    migrate_database()
    asyncio.run(seed_and_close())

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn travel_admin.main:app --reload --port 9000")


if __name__ == "__main__":
    main()
