# catalog_api/models/combo.py
import uuid
from datetime import datetime

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from catalog_api.models.product import utcnow


class Combo(SQLModel, table=True):
    """
    Bundled offer referencing several products.

    `product_ids` is stored as a JSON array of UUID strings. References are
    not enforced by the store; reads drop ids that no longer resolve.
    """

    __tablename__ = "combos"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=255, index=True)
    description: str | None = Field(default=None)

    product_ids: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    original_price: str | None = Field(default=None, max_length=50)
    combo_price: str | None = Field(default=None, max_length=50)
    savings: str | None = Field(default=None, max_length=50)

    image: str = Field(description="Combo image URL")
    media_handle: str | None = Field(default=None)

    popular: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
