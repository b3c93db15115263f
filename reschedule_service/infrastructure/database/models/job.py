"""
Job SQLAlchemy model.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Index,
    Integer,
    String,
    Time,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel

JOB_STATUSES = ("scheduled", "pending_confirmation", "in_progress", "completed", "cancelled")


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint(
            "status IN ('" + "', '".join(JOB_STATUSES) + "')", name="ck_jobs_status"
        ),
        CheckConstraint("duration_minutes > 0", name="ck_jobs_duration_positive"),
        Index("ix_jobs_contractor_date", "contractor_id", "scheduled_date"),
    )

    contractor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    client_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    customer_user_id = Column(Uuid(as_uuid=True), nullable=True)
    title = Column(String(255), nullable=True)

    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(Time, nullable=True)
    time_slot = Column(String(20), nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=60)
    status = Column(String(30), nullable=False, default="scheduled", index=True)

    # Schedule held before an applied route optimization moved the job
    original_scheduled_date = Column(Date, nullable=True)
    original_scheduled_time = Column(Time, nullable=True)
    original_time_slot = Column(String(20), nullable=True)

    route_optimization_locked = Column(Boolean, nullable=False, default=False)

    alternative_suggestions = relationship(
        "AlternativeSuggestionModel", back_populates="job", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, date={self.scheduled_date}, status={self.status})>"
