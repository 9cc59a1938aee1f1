# catalog_api/seed.py
"""
Initial catalog content.

Two ways in:
  - seed_if_empty(engine) runs on application startup and only inserts
    when the products table is empty.
  - `python -m catalog_api.seed [--reset]` (or the `catalog-seed` script)
    seeds from the command line; --reset clears existing products first.

The empty-table check is not an idempotence key: two cold starts racing
each other can both insert the seed set.
"""
import argparse
import logging
from datetime import timedelta

from sqlalchemy import Engine
from sqlmodel import Session

from catalog_api.core.config import get_settings
from catalog_api.core.storage_utils import PLACEHOLDER_IMAGE_URL
from catalog_api.database import build_engine, create_db_and_tables, is_database_connected
from catalog_api.models import combo as _combo_models  # noqa: F401
from catalog_api.models.product import Product, utcnow
from catalog_api.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)

_MEDIA = "https://res.cloudinary.com/dyfi4enfl/image/upload/v1/moderate_ustaz_products"

SEED_PRODUCTS: list[dict] = [
    {
        "name": "Premium Cotton Kaftan",
        "price": "₦18,000",
        "category": "Traditional",
        "description": "Elegant traditional kaftan made from premium cotton fabric. "
        "Perfect for formal occasions and daily wear.",
        "fabric_type": "100% Cotton",
        "texture": "Smooth and breathable",
        "quality": "Premium",
        "care": "Machine wash cold, hang dry",
        "images": [f"{_MEDIA}/kaftan1", f"{_MEDIA}/kaftan2"],
        "colors": [
            {"name": "White", "images": [f"{_MEDIA}/kaftan_white1"]},
            {"name": "Navy Blue", "images": [f"{_MEDIA}/kaftan_navy1"]},
        ],
    },
    {
        "name": "Embroidered Agbada Set",
        "price": "₦35,000",
        "category": "Premium",
        "description": "Luxurious hand-embroidered Agbada with matching cap and trousers. "
        "Crafted for special occasions.",
        "fabric_type": "Silk blend",
        "texture": "Smooth with intricate embroidery",
        "quality": "Luxury",
        "care": "Dry clean only",
        "images": [f"{_MEDIA}/agbada1", f"{_MEDIA}/agbada2"],
    },
    {
        "name": "Ankara Print Fabric",
        "price": "₦8,500",
        "category": "Fabrics",
        "description": "Vibrant Ankara print fabric, 6 yards. High-quality wax print "
        "perfect for traditional and modern designs.",
        "fabric_type": "Cotton wax print",
        "texture": "Smooth with vibrant colors",
        "quality": "Standard",
        "care": "Machine wash warm, iron on medium heat",
        "images": [f"{_MEDIA}/ankara1", f"{_MEDIA}/ankara2"],
        "colors": [
            {"name": "Red & Gold", "images": [f"{_MEDIA}/ankara_red1"]},
            {"name": "Blue & Yellow", "images": [f"{_MEDIA}/ankara_blue1"]},
        ],
    },
    {"name": "3-Piece Senator", "price": "₦15,000", "category": "Traditional"},
    {"name": "Traditional Kaftan", "price": "₦12,000", "category": "Traditional"},
    {"name": "Embroidered Cap", "price": "₦5,000", "category": "Accessories"},
    {"name": "Premium Agbada", "price": "₦25,000", "category": "Traditional"},
    {"name": "Daily Jalabiya", "price": "₦18,000", "category": "Casual"},
    {"name": "Designer Kaftan", "price": "₦20,000", "category": "Premium"},
]


def build_seed_products() -> list[Product]:
    """
    Materialize SEED_PRODUCTS.

    created_at increases by one second per entry and the last entry is
    stamped "now", so the newest-first listing shows the seed set in
    reverse order and anything created afterwards lists above it.
    """
    base = utcnow()
    products: list[Product] = []
    for i, data in enumerate(SEED_PRODUCTS):
        images = list(data.get("images") or [PLACEHOLDER_IMAGE_URL])
        fields = {k: v for k, v in data.items() if k != "images"}
        created = base - timedelta(seconds=len(SEED_PRODUCTS) - 1 - i)
        products.append(
            Product(
                **fields,
                image=images[0],
                images=images,
                media_handles=[],
                created_at=created,
                updated_at=created,
            )
        )
    return products


def seed_if_empty(engine: Engine, repo: ProductRepository | None = None) -> int:
    """
    Insert the seed set when the catalog has no products.

    Returns:
        Number of products inserted (0 when the catalog was not empty).
    """
    repo = repo or ProductRepository()
    with Session(engine) as session:
        if repo.count(session) > 0:
            return 0
        inserted = repo.create_many(session, build_seed_products())
        logger.info(f"🌱 Seeded {len(inserted)} initial products")
        return len(inserted)


def reseed(engine: Engine, repo: ProductRepository | None = None) -> int:
    """Delete every product, then insert the seed set."""
    repo = repo or ProductRepository()
    with Session(engine) as session:
        repo.delete_all(session)
        logger.info("Cleared existing products")
    return seed_if_empty(engine, repo)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the product catalog.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="delete all existing products before seeding",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    engine = build_engine(get_settings().DATABASE_URL)
    if not is_database_connected(engine):
        logger.error("❌ Database unreachable; nothing seeded")
        return 1
    create_db_and_tables(engine)

    count = reseed(engine) if args.reset else seed_if_empty(engine)
    if count == 0:
        logger.info("Catalog already has products; nothing seeded")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
