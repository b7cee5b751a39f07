import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, DateTime, JSON
from hotel_site.db.session import Base


class Facility(Base):
    __tablename__ = "facilities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text)

    image_url = Column(String)
    images = Column(JSON)
    features = Column(JSON)

    operating_hours = Column(String)
    capacity = Column(String)

    # NULL means free of charge
    price = Column(Numeric(12, 2))

    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
