# backend/models/users.py
from sqlalchemy import Column, Integer, String
from database import Base

# Market staff account; the password is only ever kept as a salted hash
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
