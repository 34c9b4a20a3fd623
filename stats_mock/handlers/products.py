"""Product lookup (static table).

Implements:
- GET /products?name=<name>

Matching is case-insensitive; the canonical spelling is returned.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import JSONResponse

from ..errors import PRODUCT_NOT_FOUND
from ..responses import json_error


@dataclass(frozen=True, slots=True)
class Product:
    id: int
    name: str


PRODUCTS: tuple[Product, ...] = (
    Product(1, "Potato"),
    Product(2, "Tomato"),
    Product(3, "Onion"),
    Product(4, "Carrot"),
    Product(5, "Cabbage"),
    Product(6, "Broccoli"),
)


def find_product(name: str) -> Product | None:
    wanted = name.strip().lower()
    if not wanted:
        return None
    for p in PRODUCTS:
        if p.name.lower() == wanted:
            return p
    return None


async def get_products(request: Request) -> JSONResponse:
    name = request.query_params.get("name") or ""
    product = find_product(name)
    if product is None:
        return json_error(PRODUCT_NOT_FOUND, 404, details={"name": name})
    return JSONResponse({"name": product.name}, status_code=200)
