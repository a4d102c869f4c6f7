from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import datetime


# -------------------------------
# Create
# -------------------------------
class ProductCreate(BaseModel):
    product_name: str = Field(min_length=2, max_length=255)
    short_description: str = Field(min_length=10, max_length=500)
    price_range: Optional[str] = Field(default=None, max_length=100)


# -------------------------------
# Update
# -------------------------------
class ProductUpdate(BaseModel):
    product_name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=10, max_length=500)
    price_range: Optional[str] = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not any(getattr(self, name) is not None for name in self.model_fields_set):
            raise ValueError("At least one field must be provided")
        return self


# -------------------------------
# Output
# -------------------------------
class ProductOut(BaseModel):
    id: int
    vendor_id: int
    product_name: str
    product_image: Optional[str] = None
    short_description: Optional[str] = None
    price_range: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
