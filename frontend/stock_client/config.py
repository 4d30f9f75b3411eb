# frontend/stock_client/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar


class ClientSettings(BaseSettings):
    API_URL: str = "http://localhost:8000"
    API_TIMEOUT: float = 8.0

    class Config:
        env_prefix: ClassVar[str] = "STOCK_"
        env_file: ClassVar[str] = ".env"
        extra: ClassVar[str] = "ignore"


settings = ClientSettings()
