# tests/test_sdk.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.pystore import StoreAPIError, StoreClient


@pytest.fixture
def sdk(app):
    return StoreClient(base_url="http://testserver", token="12345", session=TestClient(app))


def test_list_and_filter(sdk):
    assert [p.name for p in sdk.list_products()] == ["Phone", "Laptop"]
    assert [p.id for p in sdk.list_products(min_price=1000)] == [2]
    assert [p.id for p in sdk.list_products(page=2, limit=1)] == [2]
    assert sdk.list_products(search="tab") == []


def test_crud_round(sdk):
    created = sdk.create_product("Tablet", 300, color="grey")
    assert created.id == 3
    assert created.model_extra == {"color": "grey"}

    updated = sdk.update_product(3, "Tablet Pro", 350)
    assert (updated.name, updated.price) == ("Tablet Pro", 350)
    assert updated.model_extra == {"color": "grey"}
    assert sdk.get_product(3).name == "Tablet Pro"

    assert sdk.delete_product(3) == "Product deleted"
    with pytest.raises(StoreAPIError) as exc:
        sdk.get_product(3)
    assert exc.value.status_code == 404
    assert exc.value.message == "Product not found"


def test_errors_carry_server_message(app):
    anonymous = StoreClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(StoreAPIError) as exc:
        anonymous.create_product("Tablet", 300)
    assert exc.value.status_code == 401
    assert exc.value.message == "Unauthorized - missing or invalid token"


def test_validation_error(sdk):
    with pytest.raises(StoreAPIError) as exc:
        sdk.create_product("Free", 0)
    assert exc.value.status_code == 400
    assert exc.value.message == "Name and price are required"


def test_create_product_async(app, store):
    client = StoreClient(
        base_url="http://testserver", token="12345", transport=httpx.ASGITransport(app=app)
    )
    created = asyncio.run(client.create_product_async("Tablet", 300, color="grey"))
    assert isinstance(created.id, int) and created.id == 3
    assert (created.name, created.price) == ("Tablet", 300)
    assert created.model_extra == {"color": "grey"}
    assert store.get(3)["name"] == "Tablet"


def test_create_product_async_sends_token(app, store):
    anonymous = StoreClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))
    with pytest.raises(StoreAPIError) as exc:
        asyncio.run(anonymous.create_product_async("Tablet", 300))
    assert exc.value.status_code == 401
    assert len(store) == 2
