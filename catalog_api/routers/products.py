# catalog_api/routers/products.py
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlmodel import Session

from catalog_api.core.auth import require_admin
from catalog_api.core.storage_utils import MediaStorage, get_media_storage
from catalog_api.database import get_session
from catalog_api.repositories.product_repo import ProductRepository
from catalog_api.routers.forms import present_fields, read_uploads
from catalog_api.schemas.admin import MessageResponse
from catalog_api.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog_api.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])
admin_router = APIRouter(
    prefix="/admin/products",
    tags=["Admin Products"],
    dependencies=[Depends(require_admin)],
)

repo = ProductRepository()


def get_product_service(media: MediaStorage = Depends(get_media_storage)) -> ProductService:
    return ProductService(repo, media)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    service: ProductService = Depends(get_product_service),
):
    """
    List all products, newest first.

    - Public endpoint.
    """
    return service.list_products(session)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: ProductService = Depends(get_product_service),
):
    """
    Get a single product by id.

    - Public endpoint.
    """
    return service.get_product(session, product_id)


# -------- Admin endpoints --------


@admin_router.post("", response_model=ProductRead)
def create_product(
    name: str = Form(...),
    price: str = Form(...),
    category: str = Form(...),
    description: str | None = Form(None),
    fabric_type: str | None = Form(None, alias="fabricType"),
    texture: str | None = Form(None),
    quality: str | None = Form(None),
    care: str | None = Form(None),
    colors: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    session: Session = Depends(get_session),
    service: ProductService = Depends(get_product_service),
):
    """
    Create a new product (admin only).

    - multipart/form-data with up to 10 `images` (JPEG, PNG, WEBP).
    - `colors` is an optional JSON string: [{"name": ..., "images": [...]}].
    """
    payload = ProductCreate.model_validate(
        present_fields(
            name=name,
            price=price,
            category=category,
            description=description,
            fabric_type=fabric_type,
            texture=texture,
            quality=quality,
            care=care,
            colors=colors,
        )
    )
    return service.create_product(session, payload, read_uploads(images))


@admin_router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: uuid.UUID,
    name: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    description: str | None = Form(None),
    fabric_type: str | None = Form(None, alias="fabricType"),
    texture: str | None = Form(None),
    quality: str | None = Form(None),
    care: str | None = Form(None),
    colors: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    session: Session = Depends(get_session),
    service: ProductService = Depends(get_product_service),
):
    """
    Partially update a product (admin only).

    - Omitted or blank fields keep their current value.
    - Uploading `images` replaces the whole image set.
    """
    payload = ProductUpdate.model_validate(
        present_fields(
            name=name,
            price=price,
            category=category,
            description=description,
            fabric_type=fabric_type,
            texture=texture,
            quality=quality,
            care=care,
            colors=colors,
        )
    )
    return service.update_product(session, product_id, payload, read_uploads(images))


@admin_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    service: ProductService = Depends(get_product_service),
):
    """
    Delete a product and its images (admin only).

    - Storage cleanup is best-effort.
    """
    service.delete_product(session, product_id)
    return {"message": "Product deleted successfully"}
