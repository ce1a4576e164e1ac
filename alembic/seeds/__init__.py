"""Database seeding package.

Idempotent seeders that run automatically after Alembic migrations.
Each seeder checks for existing rows before inserting.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from seeds.category_seeder import seed_categories
from seeds.resource_seeder import seed_resources

logger = structlog.get_logger(__name__)


async def run_all_seeders(session: AsyncSession) -> None:
    """Run all database seeders. Called after Alembic migrations.

    Args:
        session: Async database session.
    """
    logger.info("seeding_started")

    await seed_categories(session)
    await seed_resources(session)

    logger.info("seeding_completed")


__all__ = ["run_all_seeders", "seed_categories", "seed_resources"]
