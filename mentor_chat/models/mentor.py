# mentor_chat/models/mentor.py
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base

class Mentor(Base):
    __tablename__ = "mentors"

    profile_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, unique=True, index=True)
    specialization = Column(String(500), nullable=False)  # may hold a comma-separated list
    bio = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False, index=True)

    profile = relationship("Profile", back_populates="mentor", lazy="selectin")
