import httpx
import pytest

from stock_client.api import ApiError, StockApi
from stock_client.config import ClientSettings
from stock_client.app import LOW_STOCK_WARNING, MovementForm, ProductForm, StockApp, View


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def stock_app(client, user, alerts):
    return StockApp(StockApi(client=client), alert=alerts.append)


@pytest.fixture
def logged_app(stock_app):
    assert stock_app.login("ana@mercado.com.br", "segredo1")
    return stock_app


def test_login_moves_to_home_and_keeps_user(stock_app):
    assert stock_app.login("ana@mercado.com.br", "segredo1")

    assert stock_app.view is View.HOME
    assert stock_app.user["name"] == "Ana Gerente"
    assert stock_app.api.token


def test_login_failure_shows_server_message(stock_app, alerts):
    assert not stock_app.login("ana@mercado.com.br", "errada")

    assert stock_app.view is View.LOGIN
    assert alerts == ["Credenciais inválidas"]


def test_login_validates_before_calling_api(alerts):
    def boom(request):
        raise AssertionError("no request expected")

    app = StockApp(StockApi(client=httpx.Client(transport=httpx.MockTransport(boom), base_url="http://x")), alert=alerts.append)

    assert not app.login("  ", "x")
    assert alerts == ["Informe email e senha."]


def test_transitions_follow_the_view_graph(logged_app):
    assert logged_app.go(View.LOGIN)
    assert logged_app.view is View.LOGIN
    assert logged_app.user is None
    assert logged_app.api.token is None

    assert not logged_app.go(View.PRODUCTS)
    assert logged_app.view is View.LOGIN


def test_leaf_views_only_go_back_home(logged_app):
    assert logged_app.go(View.PRODUCTS)
    assert not logged_app.go(View.STOCK)
    assert logged_app.go(View.HOME)
    assert logged_app.go(View.STOCK)
    assert logged_app.view is View.STOCK


def test_entering_a_view_refetches_products(client, logged_app, make_product):
    make_product("Arroz")
    logged_app.go(View.PRODUCTS)
    assert [p["name"] for p in logged_app.products] == ["Arroz"]

    make_product("Biscoito")
    logged_app.go(View.HOME)
    logged_app.go(View.STOCK)

    assert [p["name"] for p in logged_app.products] == ["Arroz", "Biscoito"]


def test_create_product_validates_and_clears_form(logged_app, alerts):
    logged_app.go(View.PRODUCTS)

    logged_app.product_form = ProductForm(name="", quantity="3")
    assert not logged_app.create_product()
    assert alerts[-1] == "Informe o nome do produto."

    logged_app.product_form = ProductForm(name="Sal", quantity="-1")
    assert not logged_app.create_product()
    assert alerts[-1] == "Quantidade não pode ser negativa."

    logged_app.product_form = ProductForm(name=" Sal ", quantity="4", minimum_threshold="6")
    assert logged_app.create_product()
    assert alerts[-1] == "Produto cadastrado com sucesso!"
    assert logged_app.product_form == ProductForm()
    assert [(p["name"], p["below_minimum"]) for p in logged_app.products] == [("Sal", True)]
    assert [p["name"] for p in logged_app.critical_products] == ["Sal"]


def test_edit_and_delete_product(logged_app, make_product):
    product = make_product("Feijão", 10, 5)
    logged_app.go(View.PRODUCTS)

    logged_app.start_edit(logged_app.products[0])
    logged_app.product_form.quantity = "2"
    assert logged_app.save_product()
    assert logged_app.editing_id is None
    assert logged_app.products[0]["quantity"] == 2

    assert logged_app.delete_product(product["id"])
    assert logged_app.products == []


def test_delete_needs_confirmation(client, user, make_product, alerts):
    product = make_product()
    app = StockApp(StockApi(client=client), alert=alerts.append, confirm=lambda message: False)
    app.login("ana@mercado.com.br", "segredo1")

    assert not app.delete_product(product["id"])
    assert client.get(f"/produtos/{product['id']}").status_code == 200


def test_search_filters_products(logged_app, make_product):
    make_product("Arroz Branco")
    make_product("Café")
    logged_app.go(View.PRODUCTS)

    logged_app.search("arroz")
    assert [p["name"] for p in logged_app.products] == ["Arroz Branco"]

    logged_app.clear_search()
    assert len(logged_app.products) == 2


def test_submit_movement_warns_when_below_minimum(logged_app, alerts, make_product):
    product = make_product("Feijão", 10, 5)
    logged_app.go(View.STOCK)

    logged_app.movement_form = MovementForm(product_id=str(product["id"]), kind="exit", quantity="12", note="Venda")
    assert logged_app.submit_movement()

    assert alerts[-1] == "Venda/Saída registrada." + LOW_STOCK_WARNING
    assert logged_app.products[0]["quantity"] == -2
    assert logged_app.movement_form.quantity == ""
    assert logged_app.movement_form.note == ""


def test_submit_movement_client_validation(logged_app, alerts):
    logged_app.go(View.STOCK)

    logged_app.movement_form = MovementForm(product_id="", quantity="3")
    assert not logged_app.submit_movement()
    assert alerts[-1] == "Selecione um produto."

    logged_app.movement_form = MovementForm(product_id="1", quantity="0")
    assert not logged_app.submit_movement()
    assert alerts[-1] == "Informe uma quantidade maior que zero."


def test_network_failure_shows_generic_message(alerts):
    def down(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = StockApi(client=httpx.Client(transport=httpx.MockTransport(down), base_url="http://x"))
    app = StockApp(api, alert=alerts.append)

    assert not app.login("ana@mercado.com.br", "segredo1")
    assert alerts == ["Falha no login"]

    with pytest.raises(ApiError) as excinfo:
        api.list_products()
    assert excinfo.value.status_code is None


def test_non_finite_form_numbers_do_not_crash(logged_app, alerts):
    logged_app.go(View.PRODUCTS)

    logged_app.product_form = ProductForm(name="Sal", quantity="inf", minimum_threshold="-Infinity")
    assert logged_app.create_product()
    assert logged_app.products[0]["quantity"] == 0
    assert logged_app.products[0]["minimum_threshold"] == 0

    logged_app.go(View.HOME)
    logged_app.go(View.STOCK)
    logged_app.movement_form = MovementForm(product_id=str(logged_app.products[0]["id"]), quantity="1e999")
    assert not logged_app.submit_movement()
    assert alerts[-1] == "Informe uma quantidade maior que zero."


def test_stock_view_shows_movement_history(logged_app, make_product):
    rice = make_product("Arroz", 10, 2)
    beans = make_product("Feijão", 10, 2)
    logged_app.go(View.STOCK)
    assert logged_app.history == []

    for product, kind, quantity in ((rice, "entry", 3), (beans, "exit", 1)):
        logged_app.movement_form = MovementForm(product_id=str(product["id"]), kind=kind, quantity=str(quantity))
        assert logged_app.submit_movement()

    assert [(m["product_name"], m["kind"], m["quantity"]) for m in logged_app.history] == [
        ("Feijão", "exit", 1),
        ("Arroz", "entry", 3),
    ]
    assert {m["user_name"] for m in logged_app.history} == {"Ana Gerente"}

    logged_app.load_history(rice["id"])
    assert [m["product_name"] for m in logged_app.history] == ["Arroz"]

    logged_app.go(View.HOME)
    logged_app.go(View.LOGIN)
    assert logged_app.history == []


def test_client_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("STOCK_API_URL", "http://estoque.local:9000")
    monkeypatch.setenv("STOCK_API_TIMEOUT", "2.5")

    settings = ClientSettings(_env_file=None)
    api = StockApi(base_url=settings.API_URL, timeout=settings.API_TIMEOUT)

    assert settings.API_URL == "http://estoque.local:9000"
    assert settings.API_TIMEOUT == 2.5
    assert str(api._client.base_url).startswith("http://estoque.local:9000")
    assert api._client.timeout.connect == 2.5
    api.close()
