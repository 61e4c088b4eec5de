from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from socialcare.database import Base


class Meeting(Base):
    __tablename__ = "meetings"
    __table_args__ = (Index("ix_meetings_case_id_scheduled_at", "case_id", "scheduled_at"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False, default=60)  # minutes
    meeting_type = Column(String(50), nullable=False, default="Home Visit")
    location = Column(String(300))
    attendees = Column(Text)
    case_id = Column(String(50), nullable=False)
    case_name = Column(String(200), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="Scheduled")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
