from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from ..auth.service import CurrentUser
from ..core.context import AppContext
from ..core.exceptions import StorefrontError
from ..database.core import DbSession
from ..logging import logger
from ..schemas.wishlist import WishlistLine, WishlistAddRequest, MoveToCartResponse
from ..users.service import UserStore
from .service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_wishlist_service(db: DbSession, ctx: AppContext) -> WishlistService:
    return WishlistService(UserStore(db, ctx.settings.MAX_WRITE_ATTEMPTS))


@router.get("", response_model=List[WishlistLine])
def get_wishlist(current_user: CurrentUser, wishlist: WishlistService = Depends(get_wishlist_service)):
    """Get the user's wishlist"""
    try:
        return wishlist.get_wishlist(current_user)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Wishlist GET error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch wishlist")


@router.post("/add", response_model=List[WishlistLine])
def add_to_wishlist(
    payload: WishlistAddRequest,
    current_user: CurrentUser,
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    """Add a product; a product already on the wishlist is rejected"""
    try:
        return wishlist.add_to_wishlist(
            current_user,
            product_id=payload.productId,
            name=payload.name,
            price=payload.price,
            img=payload.img,
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Wishlist ADD error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add to wishlist")


@router.post("/{product_id}/move-to-cart", response_model=MoveToCartResponse)
def move_to_cart(
    product_id: str,
    current_user: CurrentUser,
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    """Move a wishlist entry into the cart"""
    try:
        cart_lines, wishlist_lines = wishlist.move_to_cart(current_user, product_id)
        return MoveToCartResponse(cart=cart_lines, wishlist=wishlist_lines)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Wishlist MOVE error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to move item to cart")


@router.delete("/{product_id}", response_model=List[WishlistLine])
def remove_from_wishlist(
    product_id: str,
    current_user: CurrentUser,
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    """Remove a product; unknown ids are a no-op"""
    try:
        return wishlist.remove_from_wishlist(current_user, product_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Wishlist DELETE error: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to remove from wishlist")
