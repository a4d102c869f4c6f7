from sqlalchemy.orm import Session
from sqlalchemy import func

from app.vendor.models import Vendor
from app.products.models import Product
from app.vendor import service as vendor_service
from app.reviews.models import Review
from app.products.schemas import ProductOut
from app.reviews.schemas import ReviewOut
from app.vendor.schemas import VendorOut
from . import schemas


def list_vendor_stats(db: Session):
    """
    Every vendor with its stored rating aggregate and a live product count,
    newest first.
    """
    rows = (
        db.query(
            Vendor.id,
            Vendor.vendor_name,
            Vendor.business_category,
            Vendor.email,
            Vendor.contact_number,
            Vendor.city,
            Vendor.average_rating,
            Vendor.review_count,
            Vendor.created_at,
            func.count(Product.id).label("product_count"),
        )
        .outerjoin(Product, Product.vendor_id == Vendor.id)
        .group_by(Vendor.id)
        .order_by(Vendor.created_at.desc(), Vendor.id.desc())
        .all()
    )

    return [schemas.VendorStats.model_validate(row) for row in rows]


def get_vendor_detail(db: Session, vendor_id: int):
    vendor = vendor_service.get_vendor(db, vendor_id)

    products = (
        db.query(Product)
        .filter(Product.vendor_id == vendor_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    reviews = (
        db.query(Review)
        .filter(Review.vendor_id == vendor_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )

    return schemas.VendorAdminDetail(
        vendor=VendorOut.model_validate(vendor),
        products=[ProductOut.model_validate(p) for p in products],
        reviews=[ReviewOut.model_validate(r) for r in reviews],
    )
