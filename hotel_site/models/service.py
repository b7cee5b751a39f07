import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, DateTime
from hotel_site.db.session import Base


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(Text)

    # Glyph name, resolved by the site (unknown names get a default glyph)
    icon = Column(String)
    price = Column(Numeric(12, 2))

    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
