import uuid
from sqlalchemy import Column, String, Text, JSON, Date, DateTime, ForeignKey
from models.database import Base
from models.user import _utcnow


class Itinerary(Base):
    __tablename__ = "itineraries"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    owner_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    # Embedded Location documents, stored in wire (camelCase) form
    locations = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
