from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class FooterLogoBase(BaseModel):
    name: Optional[str] = None
    image_url: str
    link_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class FooterLogoOut(FooterLogoBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}
