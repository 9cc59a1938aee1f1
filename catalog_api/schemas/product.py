# catalog_api/schemas/product.py
import json
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from catalog_api.models.product import Category


class CamelModel(BaseModel):
    """
    Base for API payloads: snake_case in Python, camelCase on the wire
    (fabric_type <-> fabricType). Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


def parse_json_field(v):
    """Multipart forms carry structured fields as JSON strings."""
    if isinstance(v, str):
        try:
            return json.loads(v)
        except json.JSONDecodeError:
            raise ValueError("must be valid JSON")
    return v


class ColorVariant(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    images: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("color name cannot be empty")
        return v


class ProductCreate(CamelModel):
    """
    Fields accepted when creating a product.
    Images travel separately as uploaded files.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    price: str = Field(max_length=50)
    category: Category
    description: str | None = None
    fabric_type: str | None = Field(default=None, max_length=255)
    texture: str | None = Field(default=None, max_length=255)
    quality: str | None = Field(default=None, max_length=255)
    care: str | None = None
    colors: list[ColorVariant] | None = None

    @field_validator("name", "price")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("colors", mode="before")
    @classmethod
    def parse_colors(cls, v):
        return parse_json_field(v)


class ProductUpdate(CamelModel):
    """
    Partial update payload for products.

    Only fields that were actually sent are set on the model
    (`model_dump(exclude_unset=True)`); the router never sets
    blank form values, so an empty string cannot clear a field.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    price: str | None = Field(default=None, max_length=50)
    category: Category | None = None
    description: str | None = None
    fabric_type: str | None = Field(default=None, max_length=255)
    texture: str | None = Field(default=None, max_length=255)
    quality: str | None = Field(default=None, max_length=255)
    care: str | None = None
    colors: list[ColorVariant] | None = None

    @field_validator("name", "price")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("colors", mode="before")
    @classmethod
    def parse_colors(cls, v):
        return parse_json_field(v)


class ProductRead(CamelModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    price: str
    category: str
    description: str | None = None
    fabric_type: str | None = None
    texture: str | None = None
    quality: str | None = None
    care: str | None = None
    image: str
    images: list[str] = Field(default_factory=list)
    colors: list[ColorVariant] | None = None
    media_handles: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
