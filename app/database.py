# app/database.py
import copy
import threading
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

# This file holds the in-memory product store and its lock.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Phone", "price": 800},
    {"id": 2, "name": "Laptop", "price": 1500},
]

Product = Dict[str, Any]


class ProductStore:
    """Ordered list of product records, scoped to the process.

    Order follows insertion history minus deletions. Every read and mutation
    holds ``_lock``; ``all()`` returns a copy of the list, while ``get`` and the
    mutators hand back the stored record itself.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None, id_strategy: str = "length"):
        if id_strategy not in ("length", "monotonic"):
            raise ValueError(f"unknown id strategy: {id_strategy!r}")
        self.id_strategy = id_strategy
        self._lock = threading.Lock()
        self._products: List[Product] = [dict(p) for p in (products or [])]
        self._last_id = max((_as_int(p.get("id")) for p in self._products), default=0)

    @classmethod
    def seeded(cls, id_strategy: str = "length") -> "ProductStore":
        return cls(copy.deepcopy(SEED_PRODUCTS), id_strategy=id_strategy)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _next_id(self) -> int:
        if self.id_strategy == "monotonic":
            self._last_id = max(self._last_id, len(self._products)) + 1
            return self._last_id
        # mirrors the original length-based rule, so ids can repeat after a delete
        return len(self._products) + 1

    def _index_of(self, product_id: Optional[int]) -> int:
        if product_id is None:
            return -1
        for i, p in enumerate(self._products):
            pid = p.get("id")
            if not isinstance(pid, bool) and pid == product_id:
                return i
        return -1

    def all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id: Optional[int]) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            return self._products[i] if i >= 0 else None

    def insert(self, fields: Dict[str, Any]) -> Product:
        with self._lock:
            product = {"id": self._next_id(), **fields}
            self._products.append(product)
            self._last_id = max(self._last_id, _as_int(product.get("id")))
        logger.debug("inserted product id={}", product.get("id"))
        return product

    def update(self, product_id: Optional[int], fields: Dict[str, Any]) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return None
            product = self._products[i]
            product.update(fields)
            self._last_id = max(self._last_id, _as_int(product.get("id")))
            return product

    def delete(self, product_id: Optional[int]) -> bool:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return False
            del self._products[i]
        logger.debug("deleted product id={}", product_id)
        return True


def _as_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0
