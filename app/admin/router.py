from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from . import schemas, service


router = APIRouter()


@router.get("/vendors", response_model=List[schemas.VendorStats])
def list_vendors(db: Session = Depends(get_db)):
    return service.list_vendor_stats(db)


@router.get("/vendors/{vendor_id}", response_model=schemas.VendorAdminDetail)
def get_vendor(vendor_id: int, db: Session = Depends(get_db)):
    return service.get_vendor_detail(db, vendor_id)
