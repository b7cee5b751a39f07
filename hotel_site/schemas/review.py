from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReviewBase(BaseModel):
    guest_name: str
    guest_avatar: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True


class ReviewOut(ReviewBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ReviewPublic(ReviewOut):
    initials: str
    date_label: str


class ReviewSection(BaseModel):
    average_rating: str
    reviews: List[ReviewPublic]
