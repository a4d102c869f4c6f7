from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger

from app.exceptions import StorageError, ValidationError
from app.reviews import models, schemas
from app.reviews.aggregate import recompute_aggregate
from app.vendor import service as vendor_service


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("rating", "Rating must be a whole number between 1 and 5")
    if rating < 1 or rating > 5:
        raise ValidationError("rating", "Rating must be between 1 and 5")
    return rating


# ================= CREATE =================
def create_review(db: Session, vendor_id: int, review: schemas.ReviewCreate):
    """
    Persist a review for an existing vendor.
    Leaves the vendor's aggregate fields alone; see submit_review.
    """
    rating = validate_rating(review.rating)
    vendor_service.get_vendor(db, vendor_id)

    db_review = models.Review(
        vendor_id=vendor_id,
        client_name=review.client_name.strip(),
        project_name=review.project_name,
        rating=rating,
        comments=review.comments,
    )

    try:
        db.add(db_review)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to store review for vendor {vendor_id}")
        raise StorageError("Failed to submit review") from e

    db.refresh(db_review)
    return db_review


def submit_review(db: Session, vendor_id: int, review: schemas.ReviewCreate):
    """
    Store the review, then recompute the vendor's rating on the same path.
    If the recompute fails the review stays and StorageError is raised;
    the next submission for the vendor brings the aggregate back in line.
    """
    db_review = create_review(db, vendor_id, review)
    average_rating, review_count = recompute_aggregate(db, vendor_id)

    logger.info(
        f"Review {db_review.id} submitted for vendor {vendor_id} (rating={db_review.rating})"
    )
    return schemas.ReviewSubmitted(
        review=schemas.ReviewOut.model_validate(db_review),
        vendor=schemas.VendorRating(
            vendor_id=vendor_id,
            average_rating=float(average_rating),
            review_count=review_count,
        ),
    )


# ================= LIST =================
def list_reviews_for_vendor(db: Session, vendor_id: int):
    """Newest first. Unknown (or deleted) vendor -> NotFoundError."""
    vendor_service.get_vendor(db, vendor_id)
    return (
        db.query(models.Review)
        .filter(models.Review.vendor_id == vendor_id)
        .order_by(models.Review.created_at.desc(), models.Review.id.desc())
        .all()
    )
