from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime

from app.products.schemas import ProductOut
from app.reviews.schemas import ReviewOut
from app.vendor.schemas import VendorOut


class VendorStats(BaseModel):
    id: int
    vendor_name: str
    business_category: str
    email: str
    contact_number: str
    city: str
    average_rating: Optional[float] = None
    review_count: int
    created_at: datetime
    product_count: int

    model_config = ConfigDict(from_attributes=True)


class VendorAdminDetail(BaseModel):
    vendor: VendorOut
    products: List[ProductOut]
    reviews: List[ReviewOut]
