from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..auth.service import CurrentUser
from ..core.context import AppContext
from ..core.exceptions import StorefrontError
from ..database.core import DbSession
from ..logging import logger
from ..schemas.cart import CartLine, CartAddRequest, CartUpdateRequest, CartSummary
from ..users.service import UserStore
from .service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service(db: DbSession, ctx: AppContext) -> CartService:
    return CartService(UserStore(db, ctx.settings.MAX_WRITE_ATTEMPTS))


def _failed(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Cart {action} error: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action} cart",
    )


@router.get("", response_model=List[CartLine])
def get_cart(current_user: CurrentUser, cart: CartService = Depends(get_cart_service)):
    """Get the user's cart (empty list if never populated)"""
    try:
        return cart.get_cart(current_user)
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("fetch", e)


@router.get("/summary", response_model=CartSummary)
def get_cart_summary(
    current_user: CurrentUser,
    code: Optional[str] = Query(default=None, max_length=32),
    cart: CartService = Depends(get_cart_service),
):
    """Subtotal, shipping, tax, discount and total for the cart"""
    try:
        return cart.summarize(current_user, code)
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("summarize", e)


@router.post("/add", response_model=List[CartLine])
def add_to_cart(
    payload: CartAddRequest,
    current_user: CurrentUser,
    cart: CartService = Depends(get_cart_service),
):
    """Add a product, or increase its quantity if already in the cart"""
    try:
        return cart.add_to_cart(
            current_user,
            product_id=payload.productId,
            name=payload.name,
            price=payload.price,
            img=payload.img,
            quantity=payload.quantity,
        )
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("add to", e)


@router.put("/update/{product_id}", response_model=List[CartLine])
def update_quantity(
    product_id: str,
    payload: CartUpdateRequest,
    current_user: CurrentUser,
    cart: CartService = Depends(get_cart_service),
):
    """Set the exact quantity of a line already in the cart"""
    try:
        return cart.update_quantity(current_user, product_id, payload.quantity)
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("update", e)


@router.delete("/{product_id}", response_model=List[CartLine])
def remove_from_cart(
    product_id: str,
    current_user: CurrentUser,
    cart: CartService = Depends(get_cart_service),
):
    """Remove a line; unknown ids are a no-op"""
    try:
        return cart.remove_from_cart(current_user, product_id)
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("remove from", e)


@router.delete("", response_model=List[CartLine])
def clear_cart(current_user: CurrentUser, cart: CartService = Depends(get_cart_service)):
    """Empty the cart"""
    try:
        return cart.clear_cart(current_user)
    except StorefrontError:
        raise
    except Exception as e:
        raise _failed("clear", e)
