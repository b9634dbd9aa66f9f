# mentor_chat/models/chat/message.py
from sqlalchemy import Column, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from ..base import Base

class Message(Base):
    __tablename__ = "messages"

    chat_room_id = Column(Uuid(as_uuid=True), ForeignKey("chat_rooms.id"), nullable=False, index=True)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    # Relationships
    chat_room = relationship("ChatRoom", back_populates="messages", lazy="raise")

    # Index for ordered reads per room
    __table_args__ = (
        Index('idx_messages_room_time', 'chat_room_id', 'created_at'),
    )
