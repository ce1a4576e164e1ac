"""Product domain entity.

A value-added agricultural product listed by exactly one farmer.

Business Rules:
    - price >= 0 and stock_quantity >= 0
    - is_active gates visibility to buyers
    - a product is listed in the catalog only while active AND in stock
    - stock at or below low_stock_threshold is reported as low stock
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class Product:
    """Product listing owned by a farmer.

    Attributes:
        id: Product identifier.
        farmer_id: Owning farmer's account id.
        category_id: Optional category (weak reference, nulled on delete).
        name: Product name.
        description: Product description.
        price: Unit price (INR).
        unit: Unit of measurement (kg, litre, piece, ...).
        stock_quantity: Available inventory.
        low_stock_threshold: Inventory level that triggers a low-stock alert.
        images: Image URLs.
        is_organic: Organic certification flag.
        is_traditional: Made using traditional methods.
        processing_method: How the product is processed.
        shelf_life_days: Shelf life in days.
        tags: Searchable tags.
        is_active: Visibility flag.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.PRODUCTS

    id: UUID
    farmer_id: UUID
    name: str
    description: str
    price: Decimal
    category_id: UUID | None = None
    unit: str = "kg"
    stock_quantity: int = 0
    low_stock_threshold: int = 10
    images: list[str] = field(default_factory=list)
    is_organic: bool = False
    is_traditional: bool = False
    processing_method: str | None = None
    shelf_life_days: int | None = None
    tags: list[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_in_stock(self) -> bool:
        """Check if at least one unit is available."""
        return self.stock_quantity > 0

    def is_low_stock(self) -> bool:
        """Check if stock is at or below the alert threshold."""
        return self.stock_quantity <= self.low_stock_threshold

    def is_listed(self) -> bool:
        """Check if the product belongs in the buyer catalog.

        Returns:
            True if the product is active and in stock.
        """
        return self.is_active and self.is_in_stock()

    def matches_search(self, term: str) -> bool:
        """Case-insensitive match of term against name and description."""
        needle = term.lower()
        return needle in self.name.lower() or needle in self.description.lower()
