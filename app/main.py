# app/main.py
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from loguru import logger

from .config import Settings, get_settings
from .database import ProductStore
from .errors import register_exception_handlers
from .log import setup_logging
from .middleware import RequestLoggingMiddleware, require_token, validated_body
from .models import ErrorEnvelope, MessageEnvelope, ProductEnvelope, ProductListEnvelope
from .services import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    update_product_logic,
)

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
}


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = (
            ProductStore.seeded(settings.id_strategy)
            if settings.seed_products
            else ProductStore(id_strategy=settings.id_strategy)
        )

    app = FastAPI(title=f"{settings.app_name} (in-memory demo)")
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", response_model=ProductListEnvelope)
    async def list_products(
        search: Optional[str] = None,
        min_price: Optional[str] = Query(None, alias="minPrice"),
        max_price: Optional[str] = Query(None, alias="maxPrice"),
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return list_products_logic(store, search, min_price, max_price, page, limit)

    @app.get("/api/products/{product_id}", response_model=ProductEnvelope, responses=ERROR_RESPONSES)
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post(
        "/api/products",
        status_code=201,
        response_model=ProductEnvelope,
        responses=ERROR_RESPONSES,
        dependencies=[Depends(require_token)],
    )
    async def create_product(
        body: Dict[str, Any] = Depends(validated_body),
        store: ProductStore = Depends(get_store),
    ):
        return create_product_logic(store, body)

    @app.put(
        "/api/products/{product_id}",
        response_model=ProductEnvelope,
        responses=ERROR_RESPONSES,
        dependencies=[Depends(require_token)],
    )
    async def update_product(
        product_id: str,
        body: Dict[str, Any] = Depends(validated_body),
        store: ProductStore = Depends(get_store),
    ):
        return update_product_logic(store, product_id, body)

    @app.delete(
        "/api/products/{product_id}",
        response_model=MessageEnvelope,
        responses=ERROR_RESPONSES,
        dependencies=[Depends(require_token)],
    )
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return delete_product_logic(store, product_id)

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    logger.info("Server running at http://localhost:{}", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
