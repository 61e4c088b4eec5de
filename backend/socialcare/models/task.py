from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from socialcare.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text)
    assigned_to = Column(String(200))
    due_date = Column(DateTime(timezone=True), nullable=False)
    priority = Column(String(10), nullable=False, default="Medium")
    status = Column(String(20), nullable=False, default="Backlog", index=True)
    # Copied from the case at creation time; not kept in sync
    case_id = Column(String(50), index=True)
    case_name = Column(String(200))
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
