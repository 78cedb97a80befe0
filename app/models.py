# app/models.py
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional


class Product(BaseModel):
    # records accept any extra field the client sent
    model_config = ConfigDict(extra="allow")

    id: Any
    name: Any = None
    price: Any = None


class ProductEnvelope(BaseModel):
    success: bool = True
    data: Product


class ProductListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: List[Product]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: Optional[str] = None
