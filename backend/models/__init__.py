# backend/models/__init__.py
from models.users import User
from models.product import Product
from models.movement import Movement
from models.log import Log

__all__ = ["User", "Product", "Movement", "Log"]
