from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from . import schemas, service


router = APIRouter()


# ================= SUBMIT =================
@router.post(
    "/{vendor_id}",
    response_model=schemas.ReviewSubmitted,
    status_code=status.HTTP_201_CREATED
)
def submit_review(
    vendor_id: int,
    review: schemas.ReviewCreate,
    db: Session = Depends(get_db)
):
    return service.submit_review(db, vendor_id, review)


# ================= LIST =================
@router.get(
    "/{vendor_id}",
    response_model=List[schemas.ReviewOut]
)
def list_reviews(vendor_id: int, db: Session = Depends(get_db)):
    return service.list_reviews_for_vendor(db, vendor_id)
