"""
Route optimization SQLAlchemy models.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class RouteOptimizationModel(BaseModel):
    """Route optimization database model."""

    __tablename__ = "route_optimizations"
    __table_args__ = (
        CheckConstraint("level >= 1 AND level <= 3", name="ck_route_optimizations_level"),
        CheckConstraint(
            "status IN ('pending_approval', 'awaiting_customer', 'applied', 'declined')",
            name="ck_route_optimizations_status",
        ),
    )

    contractor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    optimization_date = Column(Date, nullable=False)
    level = Column(Integer, nullable=False, default=1)
    time_saved_minutes = Column(Integer, nullable=False, default=0)
    status = Column(String(30), nullable=False, default="pending_approval", index=True)

    suggestions = relationship(
        "RouteOptimizationSuggestionModel",
        back_populates="route_optimization",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RouteOptimizationSuggestionModel.created_at",
    )

    def __repr__(self) -> str:
        return f"<RouteOptimization(id={self.id}, status={self.status})>"


class RouteOptimizationSuggestionModel(BaseModel):
    """Route optimization line item database model."""

    __tablename__ = "route_optimization_suggestions"
    __table_args__ = (
        CheckConstraint(
            "current_time_slot IN ('morning', 'afternoon') "
            "AND suggested_time_slot IN ('morning', 'afternoon')",
            name="ck_route_optimization_suggestions_slots",
        ),
        CheckConstraint(
            "customer_approval_status IN ('pending', 'approved', 'declined')",
            name="ck_route_optimization_suggestions_approval",
        ),
    )

    route_optimization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("route_optimizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    current_date_val = Column(Date, nullable=False)
    current_time_slot = Column(String(20), nullable=False)
    suggested_date = Column(Date, nullable=False)
    suggested_time_slot = Column(String(20), nullable=False)
    requires_customer_approval = Column(Boolean, nullable=False, default=False)
    customer_approval_status = Column(String(20), nullable=False, default="pending")

    route_optimization = relationship("RouteOptimizationModel", back_populates="suggestions")

    def __repr__(self) -> str:
        return f"<RouteOptimizationSuggestion(id={self.id}, job_id={self.job_id})>"
