from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime
from hotel_site.db.session import Base


class SiteSetting(Base):
    __tablename__ = "site_settings"

    key = Column(String, primary_key=True)

    # JSON text; older rows may hold a bare string
    value = Column(Text)

    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
