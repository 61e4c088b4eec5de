from sqlalchemy import Column, Integer, String, Date, Text, DateTime, Boolean, JSON, ForeignKey
from sqlalchemy.sql import func
from socialcare.database import Base


class Case(Base):
    __tablename__ = "cases"

    id = Column(Integer, primary_key=True, index=True)
    case_id = Column(String(50), unique=True, index=True, nullable=False)
    client_full_name = Column(String(200), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    client_reference_number = Column(String(100), nullable=False)
    case_type = Column(String(100), nullable=False)
    other_case_type = Column(String(100))
    case_status = Column(String(20), nullable=False, default="Open")
    priority_level = Column(String(20), nullable=False, default="Medium")
    # Full names ("First Last"), matched against the caller's name for access
    assigned_social_workers = Column(JSON, default=list)

    # Client contact
    client_address = Column(Text)
    phone_number = Column(String(50))
    email_address = Column(String(254))
    living_situation = Column(String(50))

    # Safeguarding
    safeguarding_concerns = Column(String(3), nullable=False, default="No")
    safeguarding_details = Column(Text)

    # Meeting notes
    meeting_date = Column(DateTime(timezone=True))
    attendees = Column(Text)
    type_of_interaction = Column(String(50))
    meeting_summary = Column(Text)
    concerns_raised = Column(Text)
    immediate_actions_taken = Column(Text)
    client_wishes_feelings = Column(Text)
    new_tasks = Column(JSON, default=list)
    next_planned_review_date = Column(DateTime(timezone=True))

    # Embedded attachment records: filename, original_name, mime_type, size, uploaded_by, uploaded_at
    attachments = Column(JSON, default=list)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    archived = Column(Boolean, nullable=False, default=False, index=True)
    archived_at = Column(DateTime(timezone=True))
    archived_by = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
