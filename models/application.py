from sqlalchemy import Column, Float, Integer, String

from database import Base
from models.types import UTCDateTime

APPLICATION_STATUSES = ("pending", "approved", "rejected")


class CreditApplication(Base):
    __tablename__ = "credit_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Human-readable identifier; uniqueness is enforced by the index, not by callers
    application_id = Column(String(32), unique=True, nullable=False, index=True)
    status = Column(String(16), nullable=False, default="pending", index=True)
    # Applicant fields, immutable after creation
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    email = Column(String(256), nullable=False)
    country = Column(String(128), nullable=False)
    city = Column(String(128), nullable=False)
    address = Column(String(512), nullable=False)
    amount = Column(Float, nullable=False)
    months = Column(Integer, nullable=False)
    income = Column(Float, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)
    updated_at = Column(UTCDateTime(), nullable=False)
