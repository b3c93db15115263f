"""
Notification SQLAlchemy model.
"""

from sqlalchemy import Boolean, Column, String, Text, Uuid

from .base import BaseModel


class NotificationModel(BaseModel):
    """In-app notification written by the database notifier."""

    __tablename__ = "notifications"

    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
