# app/schemas.py
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Product
class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Monitor 49 pulgadas"])
    price: float = Field(..., gt=0, allow_inf_nan=False, examples=[399])


class ProductCreate(ProductBase):
    availability: bool = True


class ProductUpdate(ProductBase):
    availability: bool = Field(..., examples=[True])


class ProductOut(BaseModel):
    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=["Monitor de 49 pulgadas"])
    price: float = Field(..., allow_inf_nan=False, examples=[300])
    availability: bool = Field(..., examples=[True])

    model_config = ConfigDict(from_attributes=True)


# Response envelopes
class ProductResponse(BaseModel):
    data: ProductOut


class ProductListResponse(BaseModel):
    data: List[ProductOut]


class MessageResponse(BaseModel):
    data: str = Field(..., examples=["Producto Eliminado"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Producto no encontrado"])


class ValidationErrorItem(BaseModel):
    type: str = "field"
    value: Optional[Any] = None
    msg: str
    path: Optional[str] = None
    location: str


class ValidationErrorResponse(BaseModel):
    errors: List[ValidationErrorItem]
