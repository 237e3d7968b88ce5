from typing import List, Tuple

from ..cart.service import merge_into_cart
from ..core.exceptions import AlreadyExistsError, ItemNotFoundError
from ..schemas.cart import CartLine
from ..schemas.wishlist import WishlistLine
from ..users.models import User
from ..users.service import UserStore
from ..logging import logger


def _lines(documents: List[dict]) -> List[WishlistLine]:
    return [WishlistLine.model_validate(doc) for doc in documents]


class WishlistService:
    """
    Wishlist operations for one authenticated user.

    Unlike the cart, a wishlist entry is plain presence: adding a product
    that is already listed is an error rather than a merge.
    """

    def __init__(self, store: UserStore):
        self.store = store

    def get_wishlist(self, user: User) -> List[WishlistLine]:
        return _lines(user.wishlist or [])

    def add_to_wishlist(self, user: User, product_id: str, name: str, price: float, img: str) -> List[WishlistLine]:
        line = WishlistLine(product_id=product_id, name=name, price=price, img=img)

        def add(items: List[dict]) -> None:
            if any(item["product_id"] == product_id for item in items):
                raise AlreadyExistsError(product_id, where="wishlist")
            items.append(line.to_document())

        wishlist = self.store.mutate_list(user, "wishlist", add)
        logger.info(f"User {user.id} added {product_id} to wishlist")
        return _lines(wishlist)

    def remove_from_wishlist(self, user: User, product_id: str) -> List[WishlistLine]:
        def remove(items: List[dict]) -> None:
            items[:] = [item for item in items if item["product_id"] != product_id]

        wishlist = self.store.mutate_list(user, "wishlist", remove)
        logger.info(f"User {user.id} removed {product_id} from wishlist")
        return _lines(wishlist)

    def move_to_cart(self, user: User, product_id: str) -> Tuple[List[CartLine], List[WishlistLine]]:
        """Move one wishlist entry into the cart (quantity 1) in a single write."""

        def move(lists: dict) -> Tuple[List[dict], List[dict]]:
            for item in lists["wishlist"]:
                if item["product_id"] == product_id:
                    break
            else:
                raise ItemNotFoundError(product_id, where="wishlist")

            merge_into_cart(lists["cart"], CartLine(**item, quantity=1))
            lists["wishlist"] = [i for i in lists["wishlist"] if i["product_id"] != product_id]
            return lists["cart"], lists["wishlist"]

        cart, wishlist = self.store.mutate_lists(user, move)
        logger.info(f"User {user.id} moved {product_id} from wishlist to cart")
        return (
            [CartLine.model_validate(doc) for doc in cart],
            _lines(wishlist),
        )
