"""Integration tests for authentication, authorization and error envelopes."""

from protean.exceptions import ObjectNotFoundError


class TestTokens:
    def test_issue_token(self, client):
        response = client.post("/auth/token", json={"customer_id": "cust-tok"})
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["customer_id"] == "cust-tok"
        assert data["role"] == "customer"

        cart = client.get("/cart", headers={"Authorization": f"Bearer {data['token']}"})
        assert cart.status_code == 200

    def test_issue_token_in_production(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        response = client.post("/auth/token", json={})
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_dev_helpers_are_closed_in_staging(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "staging")
        token = client.post("/auth/token", json={"role": "admin"})
        gateway = client.post("/payments/gateway/configure", json={"should_succeed": False})

        assert token.status_code == 403
        assert gateway.status_code == 403
        assert gateway.json() == {"success": False, "message": "Not available in this environment"}

    def test_unknown_environment_is_closed(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "preview")
        assert client.post("/auth/token", json={}).status_code == 403


class TestAuthorization:
    def test_missing_token(self, client):
        response = client.get("/cart")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "No token, authorization denied"}

    def test_unknown_token(self, client):
        response = client.get("/cart", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token is not valid"

    def test_admin_routes_reject_customers(self, client, auth):
        response = client.get("/admin/dashboard", headers=auth)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin privileges required."

    def test_admin_routes_accept_admins(self, client, admin_auth):
        assert client.get("/admin/dashboard", headers=admin_auth).status_code == 200


class TestErrorEnvelope:
    def test_request_validation(self, client, auth):
        response = client.post("/cart/add", json={"product_id": "p1", "quantity": 0}, headers=auth)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert "quantity" in body["errors"]

    def test_not_found(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_not_found_carries_the_error_text(self, client):
        @client.app.get("/widgets/{widget_id}")
        async def get_widget(widget_id: str):
            raise ObjectNotFoundError(f"Widget {widget_id} not found")

        response = client.get("/widgets/w-1")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Widget w-1 not found"}
