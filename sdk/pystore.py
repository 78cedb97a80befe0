# sdk/pystore.py
import requests
import httpx
from typing import Any, Dict, List, Optional
from rich import print

from app.models import Product


class StoreAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _unwrap(r) -> Dict[str, Any]:
    """Decode a JSON envelope, raising StoreAPIError for error statuses."""
    try:
        body = r.json()
    except ValueError:
        body = {"message": r.text}
    if r.status_code >= 400:
        message = body.get("message") if isinstance(body, dict) else None
        # requests exposes .reason, httpx .reason_phrase
        fallback = getattr(r, "reason_phrase", None) or getattr(r, "reason", "")
        raise StoreAPIError(r.status_code, message or fallback)
    return body


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:5000", token: Optional[str] = None, timeout: int = 10, session=None, transport=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        # optional httpx transport for the async calls
        self.transport = transport
        self.timeout = timeout
        self.token = token
        if token:
            self.session.headers.update({"x-auth-token": token})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/products{path}"

    def list_products(
        self,
        search: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        params = {}
        if search:
            params["search"] = search
        if min_price is not None:
            params["minPrice"] = min_price
        if max_price is not None:
            params["maxPrice"] = max_price
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(""), params=params, timeout=self.timeout)
        return [Product(**p) for p in _unwrap(r)["data"]]

    def get_product(self, product_id: int) -> Product:
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return Product(**_unwrap(r)["data"])

    def create_product(self, name: str, price: float, **extra: Any) -> Product:
        r = self.session.post(self._url(""), json={"name": name, "price": price, **extra}, timeout=self.timeout)
        return Product(**_unwrap(r)["data"])

    def update_product(self, product_id: int, name: str, price: float, **extra: Any) -> Product:
        r = self.session.put(
            self._url(f"/{product_id}"), json={"name": name, "price": price, **extra}, timeout=self.timeout
        )
        return Product(**_unwrap(r)["data"])

    def delete_product(self, product_id: int) -> str:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        return _unwrap(r)["message"]

    # Async create (example)
    async def create_product_async(self, name: str, price: float, **extra: Any) -> Product:
        headers = {"x-auth-token": self.token} if self.token else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(self._url(""), json={"name": name, "price": price, **extra}, headers=headers)
            return Product(**_unwrap(r)["data"])


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Products API CLI")
    parser.add_argument("--base-url", default=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:5000"))
    parser.add_argument("--token", default=os.getenv("PRODUCTS_API_TOKEN"), help="Value for the x-auth-token header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--search", help="Case-insensitive name filter")
    lp.add_argument("--min-price", type=float, help="Minimum price (inclusive)")
    lp.add_argument("--max-price", type=float, help="Maximum price (inclusive)")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)

    up = subparsers.add_parser("update-product", help="Update a product")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--name", required=True)
    up.add_argument("--price", type=float, required=True)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, token=args.token)

    try:
        if args.command == "list-products":
            print([p.model_dump() for p in c.list_products(args.search, args.min_price, args.max_price, args.page, args.limit)])
        elif args.command == "get-product":
            print(c.get_product(args.product_id).model_dump())
        elif args.command == "create-product":
            print(c.create_product(args.name, args.price).model_dump())
        elif args.command == "update-product":
            print(c.update_product(args.product_id, args.name, args.price).model_dump())
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    except StoreAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
