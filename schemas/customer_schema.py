from datetime import datetime

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


# Contact details captured on the checkout form
class CustomerCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)


class CustomerOut(BaseModel):
    id: int
    email: Optional[str] = None
    name: str
    address: str
    phone: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
