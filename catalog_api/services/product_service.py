# catalog_api/services/product_service.py
import logging
import uuid
from typing import Iterable

from fastapi import HTTPException, status
from sqlmodel import Session

from catalog_api.core.storage_utils import (
    PLACEHOLDER_IMAGE_URL,
    MediaStorage,
    StoredMedia,
    delete_quietly,
    validate_image,
)
from catalog_api.models.product import Product, utcnow
from catalog_api.repositories.product_repo import ProductRepository
from catalog_api.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

MAX_PRODUCT_IMAGES = 10

PRODUCT_MEDIA_FOLDER = "products"


class ProductService:
    """
    Business logic for Product.

    Responsibilities:
      - partial update merging
      - image upload/delete orchestration with the media host
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository, media: MediaStorage):
        self.repo = repo
        self.media = media

    # ----- Helpers -----

    def _upload_images(self, files: Iterable[tuple[str | None, bytes]]) -> list[StoredMedia]:
        """
        Validate every file first, then upload them in order.

        Args:
            files: iterable of (content_type, file_bytes)
        """
        files = list(files)
        if len(files) > MAX_PRODUCT_IMAGES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Too many images (max {MAX_PRODUCT_IMAGES}).",
            )

        checked = [(validate_image(ct, data), data) for ct, data in files]

        stored: list[StoredMedia] = []
        try:
            for ct, data in checked:
                stored.append(self.media.upload(PRODUCT_MEDIA_FOLDER, ct, data))
        except Exception:
            # partial uploads are unreferenced
            delete_quietly(self.media, [m.handle for m in stored])
            raise
        return stored

    @staticmethod
    def _apply_images(product: Product, stored: list[StoredMedia]) -> None:
        if stored:
            product.image = stored[0].url
            product.images = [m.url for m in stored]
            product.media_handles = [m.handle for m in stored]
        else:
            product.image = PLACEHOLDER_IMAGE_URL
            product.images = [PLACEHOLDER_IMAGE_URL]
            product.media_handles = []

    # ----- Products -----

    def list_products(self, session: Session) -> list[Product]:
        return self.repo.list(session)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(
        self,
        session: Session,
        payload: ProductCreate,
        files: Iterable[tuple[str | None, bytes]] = (),
    ) -> Product:
        """
        Create a new product.

        - Up to MAX_PRODUCT_IMAGES images; the first becomes the primary image.
        - Without images the product gets the placeholder image.
        """
        stored = self._upload_images(files)

        product = Product(
            **payload.model_dump(exclude={"colors"}),
            colors=[c.model_dump() for c in payload.colors] if payload.colors is not None else None,
            image=PLACEHOLDER_IMAGE_URL,
        )
        self._apply_images(product, stored)

        created = self.repo.create(session, product)
        logger.info(f"Created product {created.id} with {len(stored)} image(s)")
        return created

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
        files: Iterable[tuple[str | None, bytes]] = (),
    ) -> Product:
        """
        Partial update of a product.

        - Only fields present in the payload are replaced.
        - New images replace the whole image set: every previously attached
          handle is deleted (best effort) before the new set is stored.
        """
        product = self.get_product(session, product_id)
        files = list(files)

        stored: list[StoredMedia] = []
        if files:
            stored = self._upload_images(files)

        changes = payload.model_dump(exclude_unset=True, exclude={"colors"})
        for field, value in changes.items():
            setattr(product, field, value)

        if "colors" in payload.model_fields_set and payload.colors is not None:
            product.colors = [c.model_dump() for c in payload.colors]

        if stored:
            delete_quietly(self.media, product.media_handles)
            self._apply_images(product, stored)

        product.updated_at = utcnow()
        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        product_id: uuid.UUID,
    ) -> None:
        """
        Delete a product and clean up its media.

        Media deletion failures are logged only; the record is removed
        regardless.
        """
        product = self.get_product(session, product_id)
        delete_quietly(self.media, product.media_handles)
        self.repo.delete(session, product)
        logger.info(f"Deleted product {product_id}")
