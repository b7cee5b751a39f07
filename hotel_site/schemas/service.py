from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ServiceBase(BaseModel):
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    price: Optional[Decimal] = None
    is_active: bool = True
    sort_order: int = 0


class ServiceOut(ServiceBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ServicePublic(ServiceOut):
    glyph: str
    price_label: Optional[str] = None
