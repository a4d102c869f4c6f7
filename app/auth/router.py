from fastapi import APIRouter, Depends, status, UploadFile, File
from sqlalchemy.orm import Session
from typing import Optional
from loguru import logger

from app.auth.auth import (
    authenticate_vendor,
    create_vendor_token,
    get_current_vendor,
    hash_password,
)
from app.auth import schemas
from app.database import get_db
from app.exceptions import AuthenticationError
from app.uploads import save_image
from app.vendor import schemas as vendor_schemas, service as vendor_service
from app.vendor.models import Vendor

router = APIRouter()


@router.post(
    "/register",
    response_model=schemas.TokenResponse,
    status_code=status.HTTP_201_CREATED
)
def register(vendor: vendor_schemas.VendorRegister, db: Session = Depends(get_db)):
    vendor.email = vendor.email.strip().lower()

    new_vendor = vendor_service.create_vendor(db, vendor, hash_password(vendor.password))

    return schemas.TokenResponse(
        message="Vendor registered successfully",
        vendor=vendor_schemas.VendorSummary.model_validate(new_vendor),
        token=create_vendor_token(new_vendor),
    )


@router.post("/login", response_model=schemas.TokenResponse)
def login(credentials: schemas.LoginSchema, db: Session = Depends(get_db)):
    email = credentials.email.strip().lower()

    vendor = authenticate_vendor(db, email, credentials.password)
    if not vendor:
        logger.warning(f"Authentication denied for email: {email}")
        raise AuthenticationError("Invalid credentials")

    logger.info(f"Vendor authenticated: {email}")
    return schemas.TokenResponse(
        message="Login successful",
        vendor=vendor_schemas.VendorSummary.model_validate(vendor),
        token=create_vendor_token(vendor),
    )


@router.get("/profile", response_model=vendor_schemas.VendorOut)
def get_profile(current_vendor: Vendor = Depends(get_current_vendor)):
    return current_vendor


@router.put("/profile", response_model=schemas.ProfileUpdated)
def update_profile(
    vendor_update: vendor_schemas.VendorUpdate,
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    vendor = vendor_service.update_vendor(db, current_vendor.id, vendor_update)
    logger.info(f"Vendor {vendor.id} updated profile")
    return schemas.ProfileUpdated(vendor=vendor_schemas.VendorOut.model_validate(vendor))


@router.post("/profile/logo", response_model=schemas.ProfileUpdated)
def upload_logo(
    logo: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    logo_url = save_image(logo, "logo")
    vendor = vendor_service.set_vendor_logo(db, current_vendor.id, logo_url)
    return schemas.ProfileUpdated(vendor=vendor_schemas.VendorOut.model_validate(vendor))


@router.delete("/profile")
def delete_profile(
    payload: Optional[vendor_schemas.VendorDelete] = None,
    db: Session = Depends(get_db),
    current_vendor: Vendor = Depends(get_current_vendor),
):
    reason = payload.reason if payload else None
    return vendor_service.delete_vendor(db, current_vendor.id, reason)
