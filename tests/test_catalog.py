"""
Tests for catalog management.
"""
from decimal import Decimal

import pytest

from foodorder import catalog
from foodorder.exceptions import ForbiddenError, NotFoundError, ValidationError

from conftest import caller_for, headers_for


class TestCatalogService:
    """Service-level catalog operations."""

    def test_list_available_hides_disabled(self, db_session, food_items):
        names = [item.name for item in catalog.list_available(db_session)]
        assert names == ["Margherita Pizza", "Chicken Burger"]

    def test_manager_creates_item(self, db_session, manager):
        item = catalog.create_item(db_session, caller_for(manager), "Fish Tacos", "Three tacos", Decimal("10.99"))
        assert item.id is not None
        assert item.available is True
        assert item.price == Decimal("10.99")

    def test_member_cannot_create(self, db_session, member_india):
        with pytest.raises(ForbiddenError):
            catalog.create_item(db_session, caller_for(member_india), "Fish Tacos", None, Decimal("10.99"))

    @pytest.mark.parametrize("name,price", [("", Decimal("1")), ("Soup", None), ("Soup", Decimal("-0.01"))])
    def test_create_requires_name_and_valid_price(self, db_session, admin, name, price):
        with pytest.raises(ValidationError):
            catalog.create_item(db_session, caller_for(admin), name, None, price)

    def test_free_item_allowed(self, db_session, admin):
        item = catalog.create_item(db_session, caller_for(admin), "Water", None, Decimal("0"))
        assert item.price == Decimal("0")

    def test_partial_update_keeps_other_fields(self, db_session, admin, food_items):
        pizza = food_items["pizza"]
        item = catalog.update_item(db_session, caller_for(admin), pizza.id, {"price": Decimal("13.49"), "name": None})
        assert item.name == "Margherita Pizza"
        assert item.description == "Classic pizza"
        assert item.price == Decimal("13.49")
        assert item.available is True

    def test_disable_item(self, db_session, manager, food_items):
        catalog.update_item(db_session, caller_for(manager), food_items["burger"].id, {"available": False})
        assert [item.name for item in catalog.list_available(db_session)] == ["Margherita Pizza"]

    def test_update_missing_item(self, db_session, admin, food_items):
        with pytest.raises(NotFoundError, match="Food item 404 not found"):
            catalog.update_item(db_session, caller_for(admin), 404, {"name": "Ghost"})

    def test_member_cannot_update(self, db_session, member_india, food_items):
        with pytest.raises(ForbiddenError):
            catalog.update_item(db_session, caller_for(member_india), food_items["pizza"].id, {"available": False})


class TestCatalogEndpoints:
    """Catalog over HTTP."""

    def test_list_items(self, client, member_wakanda, food_items):
        response = client.get("/food/items", headers=headers_for(member_wakanda))
        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["name"] for item in items] == ["Margherita Pizza", "Chicken Burger"]
        assert Decimal(str(items[0]["price"])) == Decimal("12.99")

    def test_list_requires_token(self, client, food_items):
        response = client.get("/food/items")
        assert response.status_code == 401
        assert response.json() == {"message": "Access token required"}

    def test_create_item(self, client, admin):
        response = client.post(
            "/food/items",
            json={"name": "Veggie Wrap", "description": "Mixed vegetables", "price": 6.99},
            headers=headers_for(admin),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Food item added successfully"
        assert data["item"]["name"] == "Veggie Wrap"
        assert data["item"]["available"] is True

    def test_create_item_forbidden_for_member(self, client, member_india):
        response = client.post(
            "/food/items",
            json={"name": "Veggie Wrap", "price": 6.99},
            headers=headers_for(member_india),
        )
        assert response.status_code == 403
        assert "message" in response.json()

    def test_create_item_missing_price(self, client, admin):
        response = client.post("/food/items", json={"name": "Veggie Wrap"}, headers=headers_for(admin))
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    def test_create_item_negative_price(self, client, admin):
        response = client.post("/food/items", json={"name": "Refund", "price": -1}, headers=headers_for(admin))
        assert response.status_code == 400

    def test_update_item(self, client, manager, food_items):
        response = client.put(
            f"/food/items/{food_items['pizza'].id}",
            json={"available": False},
            headers=headers_for(manager),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Food item updated successfully"
        assert response.json()["item"]["available"] is False
        assert response.json()["item"]["name"] == "Margherita Pizza"

    def test_update_missing_item(self, client, manager, food_items):
        response = client.put("/food/items/999", json={"name": "Ghost"}, headers=headers_for(manager))
        assert response.status_code == 404
        assert response.json() == {"message": "Food item 999 not found"}
