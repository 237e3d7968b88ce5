from typing import List
from pydantic import BaseModel, Field

from .cart import ProductLine, CartLine


class WishlistLine(ProductLine):
    """Wishlist entries carry no quantity: presence is the whole state."""


class WishlistAddRequest(BaseModel):
    productId: str = Field(..., min_length=1)
    name: str
    price: float = Field(..., ge=0)
    img: str


class MoveToCartResponse(BaseModel):
    cart: List[CartLine]
    wishlist: List[WishlistLine]
