from fastapi import APIRouter, Depends, status, UploadFile, File
from sqlalchemy.orm import Session

from app.database import get_db
from app.products import schemas, service
from app.auth.auth import get_current_vendor
from app.vendor.models import Vendor
from app.uploads import save_image


router = APIRouter()


@router.post(
    "",
    response_model=schemas.ProductOut,
    status_code=status.HTTP_201_CREATED
)
def create_product(
    product: schemas.ProductCreate,
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    return service.create_product(db, current_vendor.id, product)


@router.put(
    "/{product_id}",
    response_model=schemas.ProductOut
)
def update_product(
    product_id: int,
    product: schemas.ProductUpdate,
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    return service.update_product(db, product_id, current_vendor.id, product)


@router.post(
    "/{product_id}/image",
    response_model=schemas.ProductOut
)
def upload_product_image(
    product_id: int,
    product_image: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    # ownership check before the file is written
    service.get_owned_product(db, product_id, current_vendor.id)
    image_url = save_image(product_image, "product_image")
    return service.set_product_image(db, product_id, current_vendor.id, image_url)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    return service.delete_product(db, product_id, current_vendor.id)
