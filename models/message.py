from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text

from database import Base
from models.types import UTCDateTime

MESSAGE_AUTHORS = ("user", "admin")


class ApplicationMessage(Base):
    __tablename__ = "application_messages"
    __table_args__ = (
        Index("ix_application_messages_thread", "application_id", "created_at"),
    )

    # Autoincrement id doubles as the insertion sequence for equal timestamps
    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(32), ForeignKey("credit_applications.application_id"), nullable=False
    )
    body = Column(Text, nullable=False)
    author = Column(String(16), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)
