"""
Vendor rating aggregate.

`vendors.average_rating` and `vendors.review_count` are a cache of the
reviews table. They are always rebuilt from a full AVG/COUNT over the
vendor's reviews, never incremented, so a lost or failed update is
repaired by the next recompute for the same vendor.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from loguru import logger
from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, StorageError
from app.reviews.models import Review
from app.vendor.models import Vendor

TWO_PLACES = Decimal("0.01")


def round_rating(mean) -> Decimal:
    """Round a mean rating half-up to 2 decimals, 0.00 when there is none."""
    if mean is None:
        return Decimal("0.00")
    return Decimal(str(mean)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_aggregate(db: Session, vendor_id: int) -> Tuple[Decimal, int]:
    average, count = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.vendor_id == vendor_id)
        .one()
    )
    return round_rating(average), int(count or 0)


def recompute_aggregate(db: Session, vendor_id: int) -> Tuple[Decimal, int]:
    """
    Rebuild the vendor's average_rating / review_count from its reviews and
    store both in a single-row UPDATE.
    Raises StorageError if the read or the write fails.
    """
    try:
        average_rating, review_count = compute_aggregate(db, vendor_id)

        result = db.execute(
            update(Vendor)
            .where(Vendor.id == vendor_id)
            .values(average_rating=average_rating, review_count=review_count)
        )
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError("Vendor not found")

        db.commit()

    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Rating recompute failed for vendor {vendor_id}")
        raise StorageError("Failed to update vendor rating") from e

    logger.info(
        f"Vendor {vendor_id} rating recomputed: "
        f"average={average_rating} count={review_count}"
    )
    return average_rating, review_count
