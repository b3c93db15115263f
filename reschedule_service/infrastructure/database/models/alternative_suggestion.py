"""
Alternative suggestion SQLAlchemy model.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Uuid,
    text,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class AlternativeSuggestionModel(BaseModel):
    """Alternative suggestion database model."""

    __tablename__ = "alternative_suggestions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_alternative_suggestions_status",
        ),
        CheckConstraint(
            "suggested_time_slot IN ('7am-10am', '10am-2pm', '2pm-5pm')",
            name="ck_alternative_suggestions_slot",
        ),
        # At most one accepted suggestion per job
        Index(
            "uq_alternative_suggestions_one_accepted",
            "job_id",
            unique=True,
            postgresql_where=text("status = 'accepted'"),
            sqlite_where=text("status = 'accepted'"),
        ),
    )

    job_id = Column(
        Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True
    )
    contractor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    suggested_date = Column(Date, nullable=False)
    suggested_time_slot = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    responded_at = Column(DateTime(timezone=True), nullable=True)

    job = relationship("JobModel", back_populates="alternative_suggestions")

    def __repr__(self) -> str:
        return f"<AlternativeSuggestion(id={self.id}, job_id={self.job_id}, status={self.status})>"
