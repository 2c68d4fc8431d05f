from sqlalchemy import Column, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime

from exam_portal.core.database import Base
from exam_portal.core.types import GUID, generate_uuid


class ChatEntry(Base):
    """One chatbot exchange; never updated after insert"""
    __tablename__ = "chat_entries"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="chat_entries")

    def __repr__(self):
        return f"<ChatEntry {self.id}>"
