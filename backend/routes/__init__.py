# backend/routes/__init__.py
