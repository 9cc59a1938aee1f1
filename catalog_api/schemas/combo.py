# catalog_api/schemas/combo.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from catalog_api.schemas.product import CamelModel, ProductRead, parse_json_field


class ComboCreate(CamelModel):
    """
    Fields accepted when creating a combo.

    `products` arrives as a JSON string (multipart form), e.g.
    '["3f1c...", "9a2e..."]', and is parsed into a list of UUIDs.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    description: str | None = None
    products: list[uuid.UUID] = Field(default_factory=list)
    original_price: str | None = Field(default=None, max_length=50)
    combo_price: str | None = Field(default=None, max_length=50)
    savings: str | None = Field(default=None, max_length=50)
    popular: bool = False

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("products", mode="before")
    @classmethod
    def parse_products(cls, v):
        return parse_json_field(v)


class ComboUpdate(CamelModel):
    """
    Partial update payload for combos; same rules as ProductUpdate.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    products: list[uuid.UUID] | None = None
    original_price: str | None = Field(default=None, max_length=50)
    combo_price: str | None = Field(default=None, max_length=50)
    savings: str | None = Field(default=None, max_length=50)
    popular: bool | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("products", mode="before")
    @classmethod
    def parse_products(cls, v):
        return parse_json_field(v)


class ComboRead(CamelModel):
    """
    Combo representation for clients, with product references resolved.
    Ids that no longer match a product are left out of `products`.
    """

    id: uuid.UUID
    name: str
    description: str | None = None
    products: list[ProductRead] = Field(default_factory=list)
    original_price: str | None = None
    combo_price: str | None = None
    savings: str | None = None
    image: str
    media_handle: str | None = None
    popular: bool
    created_at: datetime
    updated_at: datetime
