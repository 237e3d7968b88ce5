from typing import List, Optional

from ..core.exceptions import ItemNotFoundError
from ..schemas.cart import CartLine, CartSummary
from ..users.models import User
from ..users.service import UserStore
from ..logging import logger

# Order-summary rules used by the storefront checkout page
FREE_SHIPPING_THRESHOLD = 200.0
SHIPPING_FEE = 50.0
TAX_RATE = 0.05
DISCOUNT_CODE = "SAVE10"
DISCOUNT_RATE = 0.10


def _lines(documents: List[dict]) -> List[CartLine]:
    return [CartLine.model_validate(doc) for doc in documents]


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError("Quantity must be a positive integer")


def merge_into_cart(cart: List[dict], line: CartLine) -> None:
    """Add-or-increment: one line per product, quantities accumulate."""
    for item in cart:
        if item["product_id"] == line.product_id:
            item["quantity"] += line.quantity
            return
    cart.append(line.to_document())


class CartService:
    """
    Cart operations for one authenticated user. Each mutation is a
    read-modify-write of the whole user document via UserStore, and
    returns the full updated list.
    """

    def __init__(self, store: UserStore):
        self.store = store

    def get_cart(self, user: User) -> List[CartLine]:
        return _lines(user.cart or [])

    def add_to_cart(
        self,
        user: User,
        product_id: str,
        name: str,
        price: float,
        img: str,
        quantity: int = 1,
    ) -> List[CartLine]:
        _check_quantity(quantity)
        line = CartLine(product_id=product_id, name=name, price=price, img=img, quantity=quantity)

        cart = self.store.mutate_list(user, "cart", lambda items: merge_into_cart(items, line))
        logger.info(f"User {user.id} added {quantity} x {product_id} to cart")
        return _lines(cart)

    def update_quantity(self, user: User, product_id: str, quantity: int) -> List[CartLine]:
        _check_quantity(quantity)

        def set_quantity(items: List[dict]) -> None:
            for item in items:
                if item["product_id"] == product_id:
                    item["quantity"] = quantity
                    return
            raise ItemNotFoundError(product_id, where="cart")

        cart = self.store.mutate_list(user, "cart", set_quantity)
        logger.info(f"User {user.id} set quantity of {product_id} to {quantity}")
        return _lines(cart)

    def remove_from_cart(self, user: User, product_id: str) -> List[CartLine]:
        def remove(items: List[dict]) -> None:
            items[:] = [item for item in items if item["product_id"] != product_id]

        cart = self.store.mutate_list(user, "cart", remove)
        logger.info(f"User {user.id} removed {product_id} from cart")
        return _lines(cart)

    def clear_cart(self, user: User) -> List[CartLine]:
        self.store.mutate_list(user, "cart", lambda items: items.clear())
        logger.info(f"User {user.id} cleared cart")
        return []

    def summarize(self, user: User, code: Optional[str] = None) -> CartSummary:
        """Totals for the checkout page; SAVE10 is the only discount code."""
        lines = self.get_cart(user)
        item_count = sum(line.quantity for line in lines)
        subtotal = sum(line.price * line.quantity for line in lines)
        shipping = 0.0 if not lines or subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_FEE
        tax = subtotal * TAX_RATE

        normalized = (code or "").strip().upper()
        applied = normalized if normalized == DISCOUNT_CODE else None
        discount = subtotal * DISCOUNT_RATE if applied else 0.0

        return CartSummary(
            itemCount=item_count,
            subtotal=round(subtotal, 2),
            shipping=round(shipping, 2),
            tax=round(tax, 2),
            discount=round(discount, 2),
            total=round(subtotal + shipping + tax - discount, 2),
            discountCode=applied,
        )
