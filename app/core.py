# app/core.py
import math
from typing import Any, Dict, List, Optional

# Query-string parsing and the list filters.
#
# A missing, empty or unparsable number behaves as if the parameter was not
# sent; page and limit additionally have to be positive.


def parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    value = parse_int(raw)
    if value is None or value <= 0:
        return None
    return value


def is_present(value: Any) -> bool:
    """Truthiness check used by the create/update validation (0 and "" fail)."""
    return bool(value)


def _price_of(product: Dict[str, Any]) -> Optional[float]:
    price = product.get("price")
    if isinstance(price, bool):
        return None
    if isinstance(price, (int, float)):
        try:
            return float(price)
        except OverflowError:
            return None
    if isinstance(price, str):
        return parse_float(price)
    return None


def filter_products(
    products: List[Dict[str, Any]],
    search: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Dict[str, Any]]:
    result = list(products)

    if search:
        term = search.lower()
        result = [p for p in result if term in str(p.get("name", "")).lower()]

    if min_price is not None:
        result = [p for p in result if _price_at_least(p, min_price)]

    if max_price is not None:
        result = [p for p in result if _price_at_most(p, max_price)]

    return result


def _price_at_least(product: Dict[str, Any], bound: float) -> bool:
    price = _price_of(product)
    return price is not None and price >= bound


def _price_at_most(product: Dict[str, Any], bound: float) -> bool:
    price = _price_of(product)
    return price is not None and price <= bound


def paginate(items: List[Any], page: Optional[int] = None, limit: Optional[int] = None) -> List[Any]:
    if not page or page < 1:
        page = 1
    if not limit or limit < 1:
        limit = len(items)
    start = (page - 1) * limit
    return items[start:start + limit]
