# backend/populate_db.py
"""Seed the database with a demo staff account and a small market catalogue.

Usage (from the backend folder):  python populate_db.py
"""
import logging
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import settings
from database import SessionLocal, dispose_engine, init_engine
from models.product import Product
from models.users import User
from utils.hashing import get_password_hash

logger = logging.getLogger("populate_db")

# Configuration
DEMO_USERS = [
    {"name": "Gerente", "email": "gerente@mercado.com.br", "password": "mercado123"},
    {"name": "Caixa 01", "email": "caixa01@mercado.com.br", "password": "caixa123"},
]

# (name, quantity, minimum_threshold)
DEMO_PRODUCTS = [
    ("Arroz Branco 5kg", 40, 15),
    ("Arroz Integral 1kg", 8, 10),
    ("Feijão Carioca 1kg", 25, 10),
    ("Feijão Preto 1kg", 4, 8),
    ("Açúcar Refinado 1kg", 30, 12),
    ("Café Torrado 500g", 18, 10),
    ("Óleo de Soja 900ml", 22, 10),
    ("Leite Integral 1L", 60, 24),
    ("Detergente Neutro 500ml", 12, 6),
    ("Sabão em Pó 1kg", 3, 5),
]
# End Configuration


def populate(session) -> None:
    created_users = 0
    for data in DEMO_USERS:
        if session.query(User).filter(User.email == data["email"]).first():
            continue
        session.add(User(name=data["name"], email=data["email"],
                         password_hash=get_password_hash(data["password"])))
        created_users += 1

    existing = {name for (name,) in session.query(Product.name).all()}
    created_products = 0
    for name, quantity, minimum in DEMO_PRODUCTS:
        if name in existing:
            continue
        session.add(Product(name=name, quantity=quantity, minimum_threshold=minimum))
        created_products += 1

    session.commit()
    logger.info("Seed finished: %d users, %d products added", created_users, created_products)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_engine(settings.DATABASE_URL)
    session = SessionLocal()
    try:
        populate(session)
    finally:
        session.close()
        dispose_engine()
