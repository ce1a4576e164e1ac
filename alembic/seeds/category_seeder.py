"""Product category seeder.

Seeds the six bilingual product categories the marketplace ships with.
Idempotent via name_en existence check - safe to run on every migration.
"""

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = [
    {
        "name_en": "Processed Foods",
        "name_hi": "प्रसंस्कृत खाद्य पदार्थ",
        "description": "Jams, pickles, dried fruits, spices",
        "icon": "food",
    },
    {
        "name_en": "Dairy Products",
        "name_hi": "डेयरी उत्पाद",
        "description": "Cheese, ghee, paneer, butter",
        "icon": "dairy",
    },
    {
        "name_en": "Beverages",
        "name_hi": "पेय पदार्थ",
        "description": "Juices, herbal teas, traditional drinks",
        "icon": "beverage",
    },
    {
        "name_en": "Grains & Flours",
        "name_hi": "अनाज और आटा",
        "description": "Organic grains, specialty flours",
        "icon": "grain",
    },
    {
        "name_en": "Handmade Crafts",
        "name_hi": "हस्तनिर्मित शिल्प",
        "description": "Traditional crafts from agricultural materials",
        "icon": "craft",
    },
    {
        "name_en": "Organic Produce",
        "name_hi": "जैविक उत्पाद",
        "description": "Fresh organic fruits and vegetables",
        "icon": "organic",
    },
]


async def seed_categories(session: AsyncSession) -> None:
    """Seed default product categories. Idempotent via name_en check.

    Args:
        session: Async database session.
    """
    seeded_count = 0
    skipped_count = 0

    for category in DEFAULT_CATEGORIES:
        result = await session.execute(
            text("SELECT 1 FROM product_categories WHERE name_en = :name_en LIMIT 1"),
            {"name_en": category["name_en"]},
        )
        if result.fetchone() is not None:
            skipped_count += 1
            logger.debug("category_exists", name_en=category["name_en"])
            continue

        category_id = uuid7()
        await session.execute(
            text("""
                INSERT INTO product_categories (
                    id, name_en, name_hi, description, icon, created_at
                )
                VALUES (:id, :name_en, :name_hi, :description, :icon, NOW())
            """),
            {"id": category_id, **category},
        )
        seeded_count += 1
        logger.info("category_seeded", name_en=category["name_en"], id=str(category_id))

    logger.info(
        "category_seeding_complete",
        seeded=seeded_count,
        skipped=skipped_count,
        total=len(DEFAULT_CATEGORIES),
    )
