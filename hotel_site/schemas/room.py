from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class RoomBase(BaseModel):
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None
    capacity: Optional[str] = None
    room_size: Optional[str] = None
    bed_type: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class RoomOut(RoomBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RoomPublic(RoomOut):
    price_label: str
    gallery: List[str]
    image_count: int
    booking_link: str
