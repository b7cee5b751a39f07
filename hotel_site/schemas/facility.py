from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class FacilityBase(BaseModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None
    operating_hours: Optional[str] = None
    capacity: Optional[str] = None
    price: Optional[Decimal] = None
    is_active: bool = True
    sort_order: int = 0


class FacilityOut(FacilityBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class FacilityPublic(FacilityOut):
    price_label: str
    gallery: List[str]
