# frontend/stock_client/app.py
"""View-state machine of the stock client.

``StockApp`` owns everything the screens show: the logged user, the current
view, the product list and the two forms (product and movement). It talks to
the API only through ``StockApi`` and reports to the user through two
callbacks, ``alert(message)`` and ``confirm(message) -> bool``, so the same
logic drives the console front end and the tests.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from stock_client.api import ApiError, StockApi

logger = logging.getLogger(__name__)


class View(str, Enum):
    LOGIN = "login"
    HOME = "home"
    PRODUCTS = "products"
    STOCK = "stock"


TRANSITIONS = {
    View.LOGIN: {View.HOME},
    View.HOME: {View.PRODUCTS, View.STOCK, View.LOGIN},
    View.PRODUCTS: {View.HOME},
    View.STOCK: {View.HOME},
}

LOW_STOCK_WARNING = "\nATENÇÃO: Estoque abaixo do mínimo!"


def not_empty(value) -> bool:
    return len(str(value if value is not None else "").strip()) > 0


def to_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass
class ProductForm:
    name: str = ""
    quantity: str = "0"
    minimum_threshold: str = "0"


@dataclass
class MovementForm:
    product_id: str = ""
    kind: str = "entry"
    quantity: str = ""
    date: str = ""   # YYYY-MM-DD, empty means "now"
    note: str = ""


class StockApp:
    def __init__(self, api: StockApi, alert: Callable[[str], None],
                 confirm: Callable[[str], bool] = lambda message: True):
        self.api = api
        self.alert = alert
        self.confirm = confirm

        self.view = View.LOGIN
        self.user: Optional[dict] = None

        self.products: List[dict] = []
        self.loading_products = False
        self.query = ""

        self.product_form = ProductForm()
        self.editing_id: Optional[int] = None
        self.movement_form = MovementForm()
        self.history: List[dict] = []

    # --- navigation ---
    def go(self, view: View) -> bool:
        view = View(view)
        if view not in TRANSITIONS[self.view]:
            logger.debug("Ignored transition %s -> %s", self.view.value, view.value)
            return False
        if view is View.LOGIN:
            self.logout()
            return True
        if self.user is None:
            self.alert("Faça login.")
            return False
        # Leaving a leaf view discards its unsaved form
        if self.view is View.PRODUCTS:
            self.cancel_edit()
        elif self.view is View.STOCK:
            self.movement_form = MovementForm()
        self.view = view
        # Leaf views always work on a fresh list
        if view in (View.PRODUCTS, View.STOCK):
            self.load_products()
        if view is View.STOCK:
            self.load_history()
        return True

    # --- login ---
    def login(self, email: str, password: str) -> bool:
        if not not_empty(email) or not not_empty(password):
            self.alert("Informe email e senha.")
            return False
        try:
            data = self.api.login(email.strip(), password)
        except ApiError as e:
            self.alert(e.message)
            return False
        self.user = {"id": data["id"], "name": data["name"], "email": data["email"]}
        self.view = View.HOME
        return True

    def logout(self):
        self.user = None
        self.api.logout()
        self.products = []
        self.cancel_edit()
        self.movement_form = MovementForm()
        self.history = []
        self.view = View.LOGIN

    # --- products ---
    def load_products(self, term: Optional[str] = None):
        term = self.query if term is None else term
        self.loading_products = True
        try:
            self.products = self.api.list_products(term)
        except ApiError as e:
            self.alert(e.message)
        finally:
            self.loading_products = False

    @property
    def sorted_products(self) -> List[dict]:
        return sorted(self.products, key=lambda p: (p["name"].casefold(), p["id"]))

    @property
    def critical_products(self) -> List[dict]:
        return [p for p in self.sorted_products if p["quantity"] < p["minimum_threshold"]]

    def search(self, term: str):
        self.query = term
        self.load_products(term)

    def clear_search(self):
        self.search("")

    def validate_product_form(self) -> Optional[str]:
        form = self.product_form
        if not not_empty(form.name):
            return "Informe o nome do produto."
        if to_int(form.quantity) < 0:
            return "Quantidade não pode ser negativa."
        if to_int(form.minimum_threshold) < 0:
            return "Estoque mínimo não pode ser negativo."
        return None

    def _product_payload(self) -> dict:
        return {
            "name": self.product_form.name.strip(),
            "quantity": to_int(self.product_form.quantity),
            "minimum_threshold": to_int(self.product_form.minimum_threshold),
        }

    def create_product(self) -> bool:
        message = self.validate_product_form()
        if message:
            self.alert(message)
            return False
        try:
            self.api.create_product(**self._product_payload())
        except ApiError as e:
            self.alert(e.message)
            return False
        self.load_products()
        self.cancel_edit()
        self.alert("Produto cadastrado com sucesso!")
        return True

    def start_edit(self, product: dict):
        self.editing_id = product["id"]
        self.product_form = ProductForm(
            name=product["name"],
            quantity=str(product["quantity"]),
            minimum_threshold=str(product["minimum_threshold"]),
        )

    def cancel_edit(self):
        self.product_form = ProductForm()
        self.editing_id = None

    def save_product(self) -> bool:
        if self.editing_id is None:
            return False
        message = self.validate_product_form()
        if message:
            self.alert(message)
            return False
        try:
            self.api.update_product(self.editing_id, **self._product_payload())
        except ApiError as e:
            self.alert(e.message)
            return False
        self.load_products()
        self.cancel_edit()
        self.alert("Produto atualizado!")
        return True

    def delete_product(self, product_id: int) -> bool:
        if not self.confirm("Tem certeza que deseja remover este item do catálogo?"):
            return False
        try:
            self.api.delete_product(product_id)
        except ApiError as e:
            self.alert(e.message)
            return False
        self.load_products()
        return True

    # --- stock movements ---
    def submit_movement(self) -> bool:
        form = self.movement_form
        if self.user is None:
            self.alert("Faça login.")
            return False
        if not not_empty(form.product_id):
            self.alert("Selecione um produto.")
            return False
        quantity = to_int(form.quantity)
        if quantity <= 0:
            self.alert("Informe uma quantidade maior que zero.")
            return False

        payload = {
            "product_id": to_int(form.product_id),
            "user_id": self.user["id"],
            "kind": form.kind,
            "quantity": quantity,
            "timestamp": f"{form.date.strip()}T00:00:00" if not_empty(form.date) else None,
            "note": form.note.strip() if not_empty(form.note) else None,
        }
        try:
            data = self.api.record_movement(**payload)
        except ApiError as e:
            self.alert(e.message)
            return False

        message = "Estoque reabastecido." if form.kind == "entry" else "Venda/Saída registrada."
        if data.get("product", {}).get("below_minimum"):
            message += LOW_STOCK_WARNING
        self.alert(message)

        self.load_products()
        self.load_history()
        self.movement_form = MovementForm(product_id=form.product_id, kind=form.kind, date=form.date)
        return True

    def load_history(self, product_id: Optional[int] = None):
        """Fetch the movement history, newest first, optionally for one product."""
        try:
            self.history = self.api.list_movements(product_id)
        except ApiError as e:
            self.alert(e.message)
