"""Educational resource seeder.

Seeds three published starter articles (English and Hindi). They have no
author, matching rows whose author account was removed.
Idempotent via title_en existence check.
"""

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

logger = structlog.get_logger(__name__)

DEFAULT_RESOURCES = [
    {
        "title_en": "Getting Started with Value Addition",
        "title_hi": "मूल्य संवर्धन के साथ शुरुआत करना",
        "content_en": "Learn the basics of adding value to your farm products "
        "and increasing profitability.",
        "content_hi": "अपने कृषि उत्पादों में मूल्य जोड़ने और लाभप्रदता बढ़ाने की मूल बातें जानें।",
        "category": "Getting Started",
        "tags": ["beginner", "value-addition"],
    },
    {
        "title_en": "Food Safety and Packaging",
        "title_hi": "खाद्य सुरक्षा और पैकेजिंग",
        "content_en": "Essential guidelines for safe food processing and "
        "attractive packaging.",
        "content_hi": "सुरक्षित खाद्य प्रसंस्करण और आकर्षक पैकेजिंग के लिए आवश्यक दिशानिर्देश।",
        "category": "Production",
        "tags": ["safety", "packaging"],
    },
    {
        "title_en": "Marketing Your Products Online",
        "title_hi": "अपने उत्पादों को ऑनलाइन मार्केटिंग करना",
        "content_en": "Strategies for effective online marketing and reaching "
        "more customers.",
        "content_hi": "प्रभावी ऑनलाइन मार्केटिंग और अधिक ग्राहकों तक पहुंचने की रणनीतियां।",
        "category": "Marketing",
        "tags": ["marketing", "digital"],
    },
]


async def seed_resources(session: AsyncSession) -> None:
    """Seed published starter resources. Idempotent via title_en check.

    Args:
        session: Async database session.
    """
    seeded_count = 0
    skipped_count = 0

    for resource in DEFAULT_RESOURCES:
        result = await session.execute(
            text("SELECT 1 FROM educational_resources WHERE title_en = :title_en LIMIT 1"),
            {"title_en": resource["title_en"]},
        )
        if result.fetchone() is not None:
            skipped_count += 1
            logger.debug("resource_exists", title_en=resource["title_en"])
            continue

        resource_id = uuid7()
        await session.execute(
            text("""
                INSERT INTO educational_resources (
                    id, title_en, title_hi, content_en, content_hi, category,
                    tags, is_published, view_count, created_at, updated_at
                )
                VALUES (
                    :id, :title_en, :title_hi, :content_en, :content_hi, :category,
                    :tags, true, 0, NOW(), NOW()
                )
            """),
            {"id": resource_id, **resource},
        )
        seeded_count += 1
        logger.info("resource_seeded", title_en=resource["title_en"], id=str(resource_id))

    logger.info(
        "resource_seeding_complete",
        seeded=seeded_count,
        skipped=skipped_count,
        total=len(DEFAULT_RESOURCES),
    )
