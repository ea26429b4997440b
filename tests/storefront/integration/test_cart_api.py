"""Integration tests for /cart endpoints via TestClient."""


class TestCartEndpoints:
    def test_empty_cart(self, client, customer):
        user_id, headers = customer
        response = client.get(f"/cart/{user_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_add_item(self, client, customer, make_product):
        user_id, headers = customer
        product_id = make_product(name="Kettle", price=30.0)

        response = client.post(f"/cart/{user_id}/items", headers=headers, json={"product_id": product_id, "quantity": 2})

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["quantity"] == 2
        assert item["product"]["name"] == "Kettle"

    def test_add_unknown_product(self, client, customer):
        user_id, headers = customer
        response = client.post(f"/cart/{user_id}/items", headers=headers, json={"product_id": "missing"})
        assert response.status_code == 404

    def test_zero_quantity_rejected(self, client, customer, make_product):
        user_id, headers = customer
        response = client.post(
            f"/cart/{user_id}/items",
            headers=headers,
            json={"product_id": make_product(), "quantity": 0},
        )
        assert response.status_code == 400

    def test_update_and_remove_item(self, client, customer, make_product):
        user_id, headers = customer
        cart = client.post(f"/cart/{user_id}/items", headers=headers, json={"product_id": make_product()}).json()
        item_id = cart["items"][0]["id"]

        updated = client.put(f"/cart/{user_id}/items/{item_id}", headers=headers, json={"quantity": 3})
        assert updated.json()["items"][0]["quantity"] == 3

        removed = client.delete(f"/cart/{user_id}/items/{item_id}", headers=headers)
        assert removed.json()["items"] == []

    def test_update_missing_item(self, client, customer, make_product):
        user_id, headers = customer
        client.post(f"/cart/{user_id}/items", headers=headers, json={"product_id": make_product()})
        response = client.put(f"/cart/{user_id}/items/missing", headers=headers, json={"quantity": 3})
        assert response.status_code == 404

    def test_clear(self, client, customer, make_product):
        user_id, headers = customer
        client.post(f"/cart/{user_id}/items", headers=headers, json={"product_id": make_product()})

        assert client.delete(f"/cart/{user_id}", headers=headers).status_code == 200
        assert client.get(f"/cart/{user_id}", headers=headers).json()["items"] == []

    def test_other_users_cart_forbidden(self, client, register):
        owner_id, _ = register()
        _, intruder_headers = register()
        assert client.get(f"/cart/{owner_id}", headers=intruder_headers).status_code == 403

    def test_admin_may_view_any_cart(self, client, customer, admin_headers):
        user_id, _ = customer
        assert client.get(f"/cart/{user_id}", headers=admin_headers).status_code == 200

    def test_requires_token(self, client, customer):
        user_id, _ = customer
        assert client.get(f"/cart/{user_id}").status_code == 401
