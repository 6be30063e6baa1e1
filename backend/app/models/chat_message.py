from datetime import datetime, timezone
from sqlalchemy import Column, Index, Integer, String, Text, DateTime
from app.db.base import Base


class ChatMessage(Base):
    __tablename__ = 'chat_history'
    __table_args__ = (
        Index('ix_chat_history_user_coaching_ts', 'user_id', 'coaching_id', 'timestamp'),
    )

    chat_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    coaching_id = Column(String(64), nullable=False)
    role = Column(String(16), nullable=False)  # user|model
    message_content = Column(Text, nullable=False)
    timestamp = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
