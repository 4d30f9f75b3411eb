# backend/models/movement.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

MOVEMENT_KINDS = ("entry", "exit")

# Immutable record of a stock change; the sign lives in `kind`, never in `quantity`
class Movement(Base):
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # entry | exit
    kind = Column(String(10), nullable=False)

    # Always a positive magnitude
    quantity = Column(Integer, nullable=False)

    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    note = Column(String, nullable=True)

    product = relationship("Product")
    user = relationship("User")
