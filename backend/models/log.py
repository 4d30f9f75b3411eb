# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from database import Base

# Audit trail of what the market staff did (logins, catalogue edits, stock operations)
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Null for anonymous events such as a failed login with an unknown email
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    action = Column(String(50), nullable=False, index=True)      # e.g. PRODUCT_CREATE
    resource = Column(String(50), nullable=False, index=True)    # auth | products | movements
    resource_id = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="SUCCESS")
    ip = Column(String(64), nullable=True)

    meta = Column(JSON, nullable=True)

    user = relationship("User", lazy="joined", uselist=False)
