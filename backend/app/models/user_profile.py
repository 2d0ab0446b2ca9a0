"""Organization details captured at registration (one per account)."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.db.base import Base

PROFILE_CATEGORIES = (
    "College",
    "Municipal Corporation",
    "School",
    "Cafe",
    "Restaurant",
    "Railway Station",
    "Airport",
    "Others",
)


class UserProfile(Base):
    __tablename__ = "user_profile"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    organization_name = Column(String(256), nullable=False)
    category = Column(String(64), nullable=False)
    mobile_number = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
