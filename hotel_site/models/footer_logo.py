import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, Integer, DateTime
from hotel_site.db.session import Base


class FooterLogo(Base):
    __tablename__ = "footer_logos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String)
    image_url = Column(String, nullable=False)
    link_url = Column(String)

    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
