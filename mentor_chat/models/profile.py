# mentor_chat/models/profile.py
import enum
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base

class UserType(str, enum.Enum):
    MENTOR = "mentor"
    PATIENT = "patient"

class Profile(Base):
    __tablename__ = "profiles"

    username = Column(String(100), unique=True, nullable=True, index=True)
    full_name = Column(String(200), nullable=True)
    user_type = Column(String(10), nullable=False)  # 'mentor' or 'patient'
    avatar_url = Column(String(500), nullable=True)

    mentor = relationship("Mentor", back_populates="profile", uselist=False, lazy="raise")
