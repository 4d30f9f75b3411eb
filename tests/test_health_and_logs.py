from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


def _auth_headers(client):
    token = client.post("/auth/login", json={"email": "ana@mercado.com.br", "password": "segredo1"}).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_reports_unreachable_store(client, monkeypatch):
    def unreachable(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(Session, "execute", unreachable)

    resp = client.get("/health")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Erro interno"}


def test_audit_log_records_actions(client, make_product, user):
    headers = _auth_headers(client)
    product = make_product()
    client.post("/auth/login", json={"email": "ana@mercado.com.br", "password": "errada"})
    client.post("/movimentacoes", json={"product_id": product["id"], "user_id": user["id"], "kind": "entry", "quantity": 1})

    logs = client.get("/logs", headers=headers).json()
    actions = [entry["action"] for entry in logs]

    assert actions[0] == "STOCK_MOVEMENT"
    assert "PRODUCT_CREATE" in actions
    assert "REGISTER" in actions

    logins = client.get("/logs", params={"action": "LOGIN"}, headers=headers).json()
    assert [entry["status"] for entry in logins] == ["FAIL", "SUCCESS"]

    mine = client.get("/logs", params={"user_id": user["id"], "resource": "movements"}, headers=headers).json()
    assert len(mine) == 1
    assert mine[0]["resource_id"] is not None


def test_audit_log_requires_a_session(client, user):
    client.post("/auth/login", json={"email": "ana@mercado.com.br", "password": "errada"})

    resp = client.get("/logs")

    assert resp.status_code == 401
    assert "ana@mercado.com.br" not in resp.text


def test_unknown_route_uses_error_body(client):
    resp = client.get("/nada")

    assert resp.status_code == 404
    assert "error" in resp.json()
