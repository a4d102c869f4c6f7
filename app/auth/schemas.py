from pydantic import BaseModel, EmailStr

from app.vendor.schemas import VendorOut, VendorSummary


class LoginSchema(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    message: str
    vendor: VendorSummary
    token: str
    token_type: str = "bearer"


class ProfileUpdated(BaseModel):
    message: str = "Profile updated successfully"
    vendor: VendorOut
