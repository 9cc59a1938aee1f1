# catalog_api/routers/combos.py
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlmodel import Session

from catalog_api.core.auth import require_admin
from catalog_api.core.storage_utils import MediaStorage, get_media_storage
from catalog_api.database import get_session
from catalog_api.repositories.combo_repo import ComboRepository
from catalog_api.repositories.product_repo import ProductRepository
from catalog_api.routers.forms import present_fields, read_uploads
from catalog_api.schemas.admin import MessageResponse
from catalog_api.schemas.combo import ComboCreate, ComboRead, ComboUpdate
from catalog_api.services.combo_service import ComboService

router = APIRouter(prefix="/combos", tags=["Combos"])
admin_router = APIRouter(
    prefix="/admin/combos",
    tags=["Admin Combos"],
    dependencies=[Depends(require_admin)],
)

repo = ComboRepository()
product_repo = ProductRepository()


def get_combo_service(media: MediaStorage = Depends(get_media_storage)) -> ComboService:
    return ComboService(repo, product_repo, media)


def _single_upload(image: UploadFile | None) -> tuple[str | None, bytes] | None:
    uploads = read_uploads([image] if image is not None else None)
    return uploads[0] if uploads else None


# -------- Public endpoints --------


@router.get("", response_model=list[ComboRead])
def list_combos(
    session: Session = Depends(get_session),
    service: ComboService = Depends(get_combo_service),
):
    """
    List combos, newest first, with products resolved.

    Products deleted after the combo was saved are left out.
    """
    return service.list_combos(session)


@router.get("/{combo_id}", response_model=ComboRead)
def get_combo(
    combo_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: ComboService = Depends(get_combo_service),
):
    return service.get_combo(session, combo_id)


# -------- Admin endpoints --------


@admin_router.post("", response_model=ComboRead)
def create_combo(
    name: str = Form(...),
    description: str | None = Form(None),
    products: str | None = Form(None),
    original_price: str | None = Form(None, alias="originalPrice"),
    combo_price: str | None = Form(None, alias="comboPrice"),
    savings: str | None = Form(None),
    popular: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    service: ComboService = Depends(get_combo_service),
):
    """
    Create a combo (admin only).

    - `products` is a JSON string holding a list of product ids.
    - one optional `image` (JPEG, PNG, WEBP).
    """
    payload = ComboCreate.model_validate(
        present_fields(
            name=name,
            description=description,
            products=products,
            original_price=original_price,
            combo_price=combo_price,
            savings=savings,
            popular=popular,
        )
    )
    return service.create_combo(session, payload, _single_upload(image))


@admin_router.put("/{combo_id}", response_model=ComboRead)
def update_combo(
    combo_id: uuid.UUID,
    name: str | None = Form(None),
    description: str | None = Form(None),
    products: str | None = Form(None),
    original_price: str | None = Form(None, alias="originalPrice"),
    combo_price: str | None = Form(None, alias="comboPrice"),
    savings: str | None = Form(None),
    popular: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    service: ComboService = Depends(get_combo_service),
):
    """
    Partially update a combo (admin only).

    - Omitted or blank fields keep their current value.
    - A new `image` replaces the previous one.
    """
    payload = ComboUpdate.model_validate(
        present_fields(
            name=name,
            description=description,
            products=products,
            original_price=original_price,
            combo_price=combo_price,
            savings=savings,
            popular=popular,
        )
    )
    return service.update_combo(session, combo_id, payload, _single_upload(image))


@admin_router.delete("/{combo_id}", response_model=MessageResponse)
def delete_combo(
    combo_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: ComboService = Depends(get_combo_service),
):
    """
    Delete a combo and its image (admin only).
    """
    service.delete_combo(session, combo_id)
    return {"message": "Combo deleted successfully"}
