# app/products.py
from dataclasses import replace

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .errors import ProductNotFound
from .models import Product
from .schemas import (
    ErrorResponse,
    MessageResponse,
    ProductCreate,
    ProductListResponse,
    ProductOut,
    ProductResponse,
    ProductUpdate,
    ValidationErrorResponse,
)
from .validation import (
    BODY,
    PARAMS,
    Check,
    Rule,
    ValidatedRequest,
    fits_decimal,
    is_boolean,
    is_int,
    is_numeric,
    is_positive,
    is_string,
    max_length,
    not_empty,
    openapi_extra,
    validate,
)

router = APIRouter(prefix="/api/products", tags=["Products"])

DELETED_MESSAGE = "Producto Eliminado"

# products.id is a 32-bit INTEGER column; larger ids cannot exist
MAX_PRODUCT_ID = 2**31 - 1

_NAME_TYPE = Product.__table__.c.name.type
_PRICE_TYPE = Product.__table__.c.price.type

# Rules
ID_RULE = Rule(
    "id",
    PARAMS,
    (Check(is_int, "Id no válido"),),
    kind="integer",
    description="The ID of the product",
)
NAME_RULE = Rule(
    "name",
    BODY,
    (
        Check(not_empty, "Este campo no puede estar vacio"),
        Check(is_string, "Nombre no válido"),
        Check(max_length(_NAME_TYPE.length), "Nombre demasiado largo"),
    ),
)
PRICE_RULE = Rule(
    "price",
    BODY,
    (
        Check(is_numeric, "Valor no válido"),
        Check(not_empty, "El precio no puede estar vacio"),
        Check(is_positive, "Precio no válido"),
        Check(fits_decimal(_PRICE_TYPE.precision, _PRICE_TYPE.scale), "Precio fuera de rango"),
    ),
    kind="number",
)
AVAILABILITY_RULE = Rule(
    "availability",
    BODY,
    (Check(is_boolean, "Valor para disponibilidad no válido"),),
    kind="boolean",
)

GET_RULES = (ID_RULE,)
CREATE_RULES = (NAME_RULE, PRICE_RULE, replace(AVAILABILITY_RULE, optional=True))
UPDATE_RULES = (ID_RULE, NAME_RULE, PRICE_RULE, AVAILABILITY_RULE)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}
BAD_REQUEST = {400: {"model": ValidationErrorResponse, "description": "Invalid ID or invalid input data"}}


async def _get_or_404(session: AsyncSession, product_id: int) -> Product:
    if abs(product_id) > MAX_PRODUCT_ID:
        raise ProductNotFound(product_id)
    product = await session.get(Product, product_id)
    if not product:
        raise ProductNotFound(product_id)
    return product


@router.get("/", response_model=ProductListResponse, include_in_schema=False)
@router.get(
    "",
    response_model=ProductListResponse,
    summary="Get a list of products",
)
async def list_products(session: AsyncSession = Depends(get_session)):
    """Return every product, newest first."""
    result = await session.execute(select(Product).order_by(Product.id.desc()))
    products = result.scalars().all()
    return ProductListResponse(data=[ProductOut.model_validate(p) for p in products])


@router.get(
    "/{id}",
    response_model=ProductResponse,
    summary="Get a product by ID",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=openapi_extra(GET_RULES),
)
async def get_product(
    req: ValidatedRequest = Depends(validate(*GET_RULES)),
    session: AsyncSession = Depends(get_session),
):
    """Return a product based on its unique ID."""
    product = await _get_or_404(session, req.int_param("id"))
    return ProductResponse(data=ProductOut.model_validate(product))


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    responses=BAD_REQUEST,
    openapi_extra=openapi_extra(CREATE_RULES, ProductCreate),
)
async def create_product(
    req: ValidatedRequest = Depends(validate(*CREATE_RULES)),
    session: AsyncSession = Depends(get_session),
):
    payload = ProductCreate.model_validate(req.body)
    product = Product(
        name=payload.name,
        price=payload.price,
        availability=payload.availability,
    )
    session.add(product)
    await session.commit()
    await session.refresh(product)
    return ProductResponse(data=ProductOut.model_validate(product))


@router.put(
    "/{id}",
    response_model=ProductResponse,
    summary="Update a product with user input",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=openapi_extra(UPDATE_RULES, ProductUpdate),
)
async def update_product(
    req: ValidatedRequest = Depends(validate(*UPDATE_RULES)),
    session: AsyncSession = Depends(get_session),
):
    """Replace name, price and availability; the response is the stored row."""
    product = await _get_or_404(session, req.int_param("id"))
    payload = ProductUpdate.model_validate(req.body)

    product.name = payload.name
    product.price = payload.price
    product.availability = payload.availability

    await session.commit()
    await session.refresh(product)
    return ProductResponse(data=ProductOut.model_validate(product))


@router.patch(
    "/{id}",
    response_model=ProductResponse,
    summary="Toggle product availability",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=openapi_extra(GET_RULES),
)
async def toggle_availability(
    req: ValidatedRequest = Depends(validate(*GET_RULES)),
    session: AsyncSession = Depends(get_session),
):
    product = await _get_or_404(session, req.int_param("id"))
    product.availability = not product.availability

    await session.commit()
    await session.refresh(product)
    return ProductResponse(data=ProductOut.model_validate(product))


@router.delete(
    "/{id}",
    response_model=MessageResponse,
    summary="Delete a product by ID",
    responses={**BAD_REQUEST, **NOT_FOUND},
    openapi_extra=openapi_extra(GET_RULES),
)
async def delete_product(
    req: ValidatedRequest = Depends(validate(*GET_RULES)),
    session: AsyncSession = Depends(get_session),
):
    product = await _get_or_404(session, req.int_param("id"))

    await session.delete(product)
    await session.commit()
    return MessageResponse(data=DELETED_MESSAGE)
