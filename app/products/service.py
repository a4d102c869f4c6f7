from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger

from app.exceptions import NotFoundError, StorageError
from app.products import models, schemas


def get_owned_product(db: Session, product_id: int, vendor_id: int):
    product = (
        db.query(models.Product)
        .filter(
            models.Product.id == product_id,
            models.Product.vendor_id == vendor_id
        )
        .first()
    )
    if not product:
        raise NotFoundError("Product not found or unauthorized")
    return product


def _commit(db: Session, failure: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(failure)
        raise StorageError(failure) from e


# ================= CREATE =================
def create_product(db: Session, vendor_id: int, product: schemas.ProductCreate):
    db_product = models.Product(
        vendor_id=vendor_id,
        product_name=product.product_name.strip(),
        short_description=product.short_description,
        price_range=product.price_range,
    )

    db.add(db_product)
    _commit(db, "Failed to create product")
    db.refresh(db_product)

    logger.info(f"Product {db_product.id} created for vendor {vendor_id}")
    return db_product


# ================= UPDATE =================
def update_product(
    db: Session,
    product_id: int,
    vendor_id: int,
    product: schemas.ProductUpdate
):
    db_product = get_owned_product(db, product_id, vendor_id)

    for field, value in product.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(db_product, field, value)

    _commit(db, "Failed to update product")
    db.refresh(db_product)
    return db_product


def set_product_image(db: Session, product_id: int, vendor_id: int, image_url: str):
    db_product = get_owned_product(db, product_id, vendor_id)
    db_product.product_image = image_url

    _commit(db, "Failed to update product")
    db.refresh(db_product)
    return db_product


# ================= DELETE =================
def delete_product(db: Session, product_id: int, vendor_id: int):
    db_product = get_owned_product(db, product_id, vendor_id)

    db.delete(db_product)
    _commit(db, "Failed to delete product")

    logger.info(f"Product {product_id} deleted by vendor {vendor_id}")
    return {"message": "Product deleted successfully"}
