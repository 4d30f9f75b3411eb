# frontend/stock_client/__init__.py
from stock_client.api import ApiError, StockApi
from stock_client.app import StockApp, View

__all__ = ["ApiError", "StockApi", "StockApp", "View"]
