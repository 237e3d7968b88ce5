from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductLine(BaseModel):
    """Product snapshot embedded in a user document. Stored snake_case, served camelCase."""
    product_id: str = Field(..., alias="productId", min_length=1)
    name: str
    price: float = Field(..., ge=0)
    img: str

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=False)


class CartLine(ProductLine):
    quantity: int = Field(..., ge=1)


class CartAddRequest(BaseModel):
    productId: str = Field(..., min_length=1)
    name: str
    price: float = Field(..., ge=0)
    img: str
    quantity: int = Field(1, ge=1)


class CartUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class CartSummary(BaseModel):
    itemCount: int
    subtotal: float
    shipping: float
    tax: float
    discount: float
    total: float
    discountCode: Optional[str] = None
