# catalog_api/repositories/product_repo.py
import uuid
from typing import Iterable

from sqlalchemy import delete, func
from sqlmodel import Session, select

from catalog_api.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_many(self, session: Session, product_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Product]:
        """Fetch several products at once, keyed by id. Unknown ids are absent."""
        ids = list(product_ids)
        if not ids:
            return {}
        stmt = select(Product).where(Product.id.in_(ids))
        return {p.id: p for p in session.exec(stmt).all()}

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Product)).one()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def create_many(self, session: Session, products: list[Product]) -> list[Product]:
        session.add_all(products)
        session.commit()
        return products

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()

    def delete_all(self, session: Session) -> None:
        session.exec(delete(Product))
        session.commit()

    def list(self, session: Session) -> list[Product]:
        """All products, newest first."""
        stmt = select(Product).order_by(Product.created_at.desc())
        return list(session.exec(stmt).all())
