# frontend/stock_client/api.py
import logging
from typing import Optional

import httpx

from stock_client.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed call; ``message`` is what the user gets to see."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StockApi:
    """Thin wrapper over the Mercado REST API.

    Any ``httpx.Client`` can be passed in (the tests hand over a FastAPI
    ``TestClient``); otherwise one is built from ``ClientSettings``.
    """

    def __init__(self, client: Optional[httpx.Client] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self._client = client or httpx.Client(
            base_url=base_url or settings.API_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
        )
        self.token: Optional[str] = None

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", method, path, e)
            raise ApiError(f"{fallback} (tempo esgotado)")
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(fallback)

        if response.status_code >= 400:
            try:
                message = response.json().get("error") or fallback
            except (ValueError, AttributeError):
                message = fallback
            raise ApiError(message, response.status_code)
        return response.json()

    # --- auth ---
    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/login", "Falha no login",
                             json={"email": email, "password": password})
        self.token = data.get("access_token")
        return data

    def logout(self):
        self.token = None

    # --- products ---
    def list_products(self, q: str = "") -> list:
        params = {"q": q} if q.strip() else None
        data = self._request("GET", "/produtos", "Erro ao carregar estoque do mercado", params=params)
        return data if isinstance(data, list) else []

    def create_product(self, name: str, quantity: int, minimum_threshold: int) -> dict:
        return self._request("POST", "/produtos", "Erro ao criar produto", json={
            "name": name, "quantity": quantity, "minimum_threshold": minimum_threshold,
        })

    def update_product(self, product_id: int, **fields) -> dict:
        return self._request("PUT", f"/produtos/{product_id}", "Erro ao salvar produto", json=fields)

    def delete_product(self, product_id: int) -> dict:
        return self._request("DELETE", f"/produtos/{product_id}", "Erro ao excluir produto")

    # --- movements ---
    def record_movement(self, **payload) -> dict:
        return self._request("POST", "/movimentacoes", "Erro ao registrar movimentação", json=payload)

    def list_movements(self, product_id: Optional[int] = None) -> list:
        params = {"produto_id": product_id} if product_id is not None else None
        return self._request("GET", "/movimentacoes", "Erro ao carregar movimentações", params=params)
