# mentor_chat/models/chat/chat_room.py
from sqlalchemy import Column, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from ..base import Base

class ChatRoom(Base):
    __tablename__ = "chat_rooms"

    mentor_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True)
    patient_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True)

    # Relationships
    messages = relationship("Message", back_populates="chat_room", lazy="raise")

    # One room per directional (mentor, patient) pair
    __table_args__ = (
        UniqueConstraint('mentor_id', 'patient_id', name='uq_chat_rooms_mentor_patient'),
    )
