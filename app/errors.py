# app/errors.py
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

PRODUCT_NOT_FOUND_MESSAGE = "Producto no encontrado"
CORS_ERROR_MESSAGE = "Error de CORS"


class ProductNotFound(Exception):
    """Raised when a product id has no row in the store."""

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class InputValidationError(Exception):
    """Raised by the validation dependency; carries every failed check."""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


async def product_not_found_handler(request: Request, exc: ProductNotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": PRODUCT_NOT_FOUND_MESSAGE})


async def input_validation_handler(request: Request, exc: InputValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductNotFound, product_not_found_handler)
    app.add_exception_handler(InputValidationError, input_validation_handler)
