# catalog_api/models/product.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(str, Enum):
    TRADITIONAL = "Traditional"
    CASUAL = "Casual"
    PREMIUM = "Premium"
    FABRICS = "Fabrics"
    ACCESSORIES = "Accessories"


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Image invariant:
      - `image` is always set (placeholder when nothing was uploaded)
      - when `images` is non-empty, images[0] == image
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    price: str = Field(
        max_length=50,
        description="Formatted price, e.g. '₦15,000'",
    )

    category: str = Field(
        max_length=50,
        index=True,
        description="One of Category values",
    )

    description: str | None = Field(default=None)
    fabric_type: str | None = Field(default=None, max_length=255)
    texture: str | None = Field(default=None, max_length=255)
    quality: str | None = Field(default=None, max_length=255)
    care: str | None = Field(default=None)

    image: str = Field(description="Primary image URL")

    images: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Ordered gallery; first element is the primary image",
    )

    colors: list[dict] | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Color variants: [{name, images: [...]}, ...]",
    )

    media_handles: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Media host deletion handles for uploaded images",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last update timestamp (UTC)",
    )
