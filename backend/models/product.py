# backend/models/product.py
from sqlalchemy import Column, Integer, String
from database import Base

# Model Product
# Item of the market catalogue with its current stock level and the
# minimum level below which it has to be restocked.
# Quantities are not constrained at the database level: exits may drive
# the stock negative and the client shows it as a restock alert.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    quantity = Column(Integer, nullable=False, default=0)
    minimum_threshold = Column(Integer, nullable=False, default=0)
