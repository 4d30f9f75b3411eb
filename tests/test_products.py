import pytest


def test_create_product_computes_below_minimum(client):
    low = client.post("/produtos", json={"name": "Sal", "quantity": 2, "minimum_threshold": 5}).json()
    ok = client.post("/produtos", json={"name": "Açúcar", "quantity": 5, "minimum_threshold": 5}).json()

    assert low["below_minimum"] is True
    assert ok["below_minimum"] is False
    assert set(low) == {"id", "name", "quantity", "minimum_threshold", "below_minimum"}


def test_create_product_defaults_and_non_numeric_values(client):
    resp = client.post("/produtos", json={"name": "Macarrão", "quantity": "muitos"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["quantity"] == 0
    assert body["minimum_threshold"] == 0
    assert body["below_minimum"] is False


@pytest.mark.parametrize("raw_quantity", ["1e400", "Infinity", "\"inf\"", "\"Infinity\"", "\"NaN\""])
def test_create_product_non_finite_quantity_defaults_to_zero(client, raw_quantity):
    # Raw body: infinite floats cannot be produced by a strict JSON encoder
    body = '{"name": "Sal", "quantity": ' + raw_quantity + ', "minimum_threshold": 2}'
    resp = client.post("/produtos", content=body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 200
    assert resp.json()["quantity"] == 0


def test_create_product_accepts_original_field_names(client):
    body = client.post("/produtos", json={"nome": "Óleo", "quantidade": "7", "estoque_minimo": 3}).json()

    assert body["name"] == "Óleo"
    assert body["quantity"] == 7
    assert body["minimum_threshold"] == 3


def test_create_product_requires_name(client):
    resp = client.post("/produtos", json={"quantity": 3})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Campo obrigatório: name"}


def test_get_product(client, make_product):
    created = make_product()

    assert client.get(f"/produtos/{created['id']}").json() == created
    resp = client.get("/produtos/9999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Produto não encontrado"}


def test_list_products_filters_case_insensitively_and_sorts_by_name(client, make_product):
    make_product("Arroz Integral 1kg")
    make_product("Feijão Preto")
    make_product("Arroz Branco 5kg")
    make_product("Farinha de ARROZ")

    names = [p["name"] for p in client.get("/produtos", params={"q": "arroz"}).json()]

    assert names == ["Arroz Branco 5kg", "Arroz Integral 1kg", "Farinha de ARROZ"]


def test_list_products_without_filter_returns_all(client, make_product):
    make_product("Café")
    make_product("Biscoito")

    body = client.get("/produtos", params={"q": "  "}).json()

    assert [p["name"] for p in body] == ["Biscoito", "Café"]
    assert all("below_minimum" in p for p in body)


def test_update_merges_supplied_fields(client, make_product):
    created = make_product("Feijão", 10, 5)

    resp = client.put(f"/produtos/{created['id']}", json={"quantity": 5})

    assert resp.status_code == 200
    body = resp.json()
    assert body["quantity"] == 5
    assert body["name"] == "Feijão"
    assert body["minimum_threshold"] == 5


def test_update_ignores_null_fields(client, make_product):
    created = make_product("Feijão", 10, 5)

    body = client.put(f"/produtos/{created['id']}", json={"name": None, "minimum_threshold": 20}).json()

    assert body["name"] == "Feijão"
    assert body["minimum_threshold"] == 20
    assert body["below_minimum"] is True


def test_update_rejects_blank_name_and_non_numeric_quantity(client, make_product):
    created = make_product()

    assert client.put(f"/produtos/{created['id']}", json={"name": " "}).status_code == 400
    resp = client.put(f"/produtos/{created['id']}", json={"quantity": "abc"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_update_missing_product(client):
    resp = client.put("/produtos/404", json={"quantity": 1})

    assert resp.status_code == 404


def test_delete_product(client, make_product):
    created = make_product()

    resp = client.delete(f"/produtos/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Produto excluído"}
    assert client.get(f"/produtos/{created['id']}").status_code == 404
    assert client.delete(f"/produtos/{created['id']}").status_code == 404


def test_delete_product_with_history_is_refused(client, make_product, user):
    created = make_product()
    client.post("/movimentacoes", json={"product_id": created["id"], "user_id": user["id"], "kind": "entry", "quantity": 1})

    resp = client.delete(f"/produtos/{created['id']}")

    assert resp.status_code == 409
    assert client.get(f"/produtos/{created['id']}").status_code == 200
