"""Integration tests for the cart endpoints."""


class TestCartAPI:
    def test_empty_cart_on_first_access(self, client, auth):
        data = client.get("/cart", headers=auth).json()["data"]
        assert data["items"] == []
        assert data["totals"]["total"] == 0.0

    def test_add_update_remove(self, client, auth, add_product):
        product = add_product(price=10.0)

        response = client.post("/cart/add", json={"product_id": str(product.id), "quantity": 2}, headers=auth)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item added to cart successfully"
        assert body["data"]["items"][0]["quantity"] == 2
        assert body["data"]["totals"] == {
            "subtotal": 20.0,
            "tax": 1.6,
            "shipping": 15.0,
            "total": 36.6,
            "currency": "USD",
        }

        response = client.put("/cart/update", json={"product_id": str(product.id), "quantity": 3}, headers=auth)
        assert response.json()["data"]["items"][0]["quantity"] == 3

        response = client.delete(f"/cart/remove/{product.id}", headers=auth)
        assert response.json()["data"]["items"] == []

    def test_stock_limit(self, client, auth, add_product):
        product = add_product(quantity=2)
        response = client.post("/cart/add", json={"product_id": str(product.id), "quantity": 3}, headers=auth)
        assert response.status_code == 400
        assert response.json()["message"] == "Only 2 items available in stock"

    def test_remove_unknown_item(self, client, auth):
        response = client.delete("/cart/remove/missing", headers=auth)
        assert response.status_code == 404
        assert response.json()["message"] == "Item not found in cart"

    def test_clear(self, client, auth, add_product):
        client.post("/cart/add", json={"product_id": str(add_product().id), "quantity": 1}, headers=auth)
        response = client.delete("/cart/clear", headers=auth)
        assert response.json()["data"]["items"] == []
