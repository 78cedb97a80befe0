# app/services.py
from typing import Any, Dict, Optional

from .core import filter_products, paginate, parse_float, parse_int, parse_positive_int
from .database import ProductStore
from .errors import NotFoundError

# This file contains the core logic for all product endpoints.


def parse_product_id(raw: str) -> Optional[int]:
    # anything that is not an integer simply matches no product
    return parse_int(raw)


def list_products_logic(
    store: ProductStore,
    search: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    result = filter_products(
        store.all(),
        search=search,
        min_price=parse_float(min_price),
        max_price=parse_float(max_price),
    )
    paginated = paginate(result, parse_positive_int(page), parse_positive_int(limit))
    return {"success": True, "count": len(paginated), "data": paginated}


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    product = store.get(parse_product_id(product_id))
    if product is None:
        raise NotFoundError()
    return {"success": True, "data": product}


def create_product_logic(store: ProductStore, body: Dict[str, Any]) -> Dict[str, Any]:
    product = store.insert(body)
    return {"success": True, "data": product}


def update_product_logic(store: ProductStore, product_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
    product = store.update(parse_product_id(product_id), body)
    if product is None:
        raise NotFoundError()
    return {"success": True, "data": product}


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    if not store.delete(parse_product_id(product_id)):
        raise NotFoundError()
    return {"success": True, "message": "Product deleted"}
