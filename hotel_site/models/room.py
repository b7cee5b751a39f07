import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, DateTime, JSON
from hotel_site.db.session import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text)

    # Price per night (IDR)
    price = Column(Numeric(12, 2), nullable=False)

    # Primary image + ordered gallery
    image_url = Column(String)
    images = Column(JSON)
    features = Column(JSON)

    capacity = Column(String)
    room_size = Column(String)
    bed_type = Column(String)

    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
