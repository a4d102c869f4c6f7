from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


# ================= CREATE =================
class ReviewCreate(BaseModel):
    client_name: str = Field(min_length=2, max_length=255)
    project_name: Optional[str] = Field(default=None, max_length=255)
    rating: int = Field(ge=1, le=5, strict=True)
    comments: str = Field(min_length=10, max_length=1000)


# ================= RESPONSE =================
class ReviewOut(BaseModel):
    id: int
    vendor_id: int
    client_name: str
    project_name: Optional[str] = None
    rating: int
    comments: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VendorRating(BaseModel):
    vendor_id: int
    average_rating: float
    review_count: int


class ReviewSubmitted(BaseModel):
    message: str = "Review submitted successfully"
    review: ReviewOut
    vendor: VendorRating
