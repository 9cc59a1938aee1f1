# catalog_api/services/combo_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from catalog_api.core.storage_utils import (
    PLACEHOLDER_IMAGE_URL,
    MediaStorage,
    delete_quietly,
    validate_image,
)
from catalog_api.models.combo import Combo
from catalog_api.models.product import utcnow
from catalog_api.repositories.combo_repo import ComboRepository
from catalog_api.repositories.product_repo import ProductRepository
from catalog_api.schemas.combo import ComboCreate, ComboRead, ComboUpdate
from catalog_api.schemas.product import ProductRead

logger = logging.getLogger(__name__)

COMBO_MEDIA_FOLDER = "combos"


class ComboService:
    """
    Business logic for Combo.

    Mirrors ProductService with a single image per combo, and resolves the
    stored product ids into full products on every read.
    """

    def __init__(
        self,
        repo: ComboRepository,
        product_repo: ProductRepository,
        media: MediaStorage,
    ):
        self.repo = repo
        self.product_repo = product_repo
        self.media = media

    # ----- Helpers -----

    def _get_combo(self, session: Session, combo_id: uuid.UUID) -> Combo:
        combo = self.repo.get_by_id(session, combo_id)
        if not combo:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Combo not found",
            )
        return combo

    def _to_read_models(self, session: Session, combos: list[Combo]) -> list[ComboRead]:
        """
        Resolve product references for a batch of combos with one query.

        Dangling ids (product deleted since) are omitted; order of the
        remaining products follows `product_ids`.
        """
        wanted = {uuid.UUID(pid) for combo in combos for pid in combo.product_ids}
        found = self.product_repo.get_many(session, wanted)

        result: list[ComboRead] = []
        for combo in combos:
            products = [
                ProductRead.model_validate(found[uuid.UUID(pid)])
                for pid in combo.product_ids
                if uuid.UUID(pid) in found
            ]
            dangling = len(combo.product_ids) - len(products)
            if dangling:
                logger.info(f"Combo {combo.id} references {dangling} missing product(s)")
            result.append(
                ComboRead.model_validate(
                    {
                        **combo.model_dump(exclude={"product_ids"}),
                        "products": products,
                    }
                )
            )
        return result

    def _upload_image(self, image: tuple[str | None, bytes] | None):
        if image is None:
            return None
        content_type, file_bytes = image
        content_type = validate_image(content_type, file_bytes)
        return self.media.upload(COMBO_MEDIA_FOLDER, content_type, file_bytes)

    # ----- Combos -----

    def list_combos(self, session: Session) -> list[ComboRead]:
        return self._to_read_models(session, self.repo.list(session))

    def get_combo(self, session: Session, combo_id: uuid.UUID) -> ComboRead:
        return self._to_read_models(session, [self._get_combo(session, combo_id)])[0]

    def create_combo(
        self,
        session: Session,
        payload: ComboCreate,
        image: tuple[str | None, bytes] | None = None,
    ) -> ComboRead:
        """
        Create a combo; without an image the placeholder is used.
        """
        stored = self._upload_image(image)

        combo = Combo(
            **payload.model_dump(exclude={"products"}),
            product_ids=[str(pid) for pid in payload.products],
            image=stored.url if stored else PLACEHOLDER_IMAGE_URL,
            media_handle=stored.handle if stored else None,
        )
        created = self.repo.create(session, combo)
        logger.info(f"Created combo {created.id} with {len(combo.product_ids)} product(s)")
        return self._to_read_models(session, [created])[0]

    def update_combo(
        self,
        session: Session,
        combo_id: uuid.UUID,
        payload: ComboUpdate,
        image: tuple[str | None, bytes] | None = None,
    ) -> ComboRead:
        """
        Partial update of a combo.

        A new image deletes the previous handle (best effort) before the new
        one is stored.
        """
        combo = self._get_combo(session, combo_id)
        stored = self._upload_image(image)

        changes = payload.model_dump(exclude_unset=True, exclude={"products"})
        for field, value in changes.items():
            setattr(combo, field, value)

        if payload.products is not None:
            combo.product_ids = [str(pid) for pid in payload.products]

        if stored:
            if combo.media_handle:
                delete_quietly(self.media, [combo.media_handle])
            combo.image = stored.url
            combo.media_handle = stored.handle

        combo.updated_at = utcnow()
        updated = self.repo.update(session, combo)
        return self._to_read_models(session, [updated])[0]

    def delete_combo(self, session: Session, combo_id: uuid.UUID) -> None:
        """
        Delete a combo and its image. Media failures are logged only.
        """
        combo = self._get_combo(session, combo_id)
        if combo.media_handle:
            delete_quietly(self.media, [combo.media_handle])
        self.repo.delete(session, combo)
        logger.info(f"Deleted combo {combo_id}")
