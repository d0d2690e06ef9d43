# shophub/services/cart_service.py
import threading
from decimal import Decimal
from typing import List

from shophub.domain.schemas import CartItem
from shophub.services.catalog_client import CatalogClient
from shophub.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Koszyk w pamieci, zyje tyle co sesja.
    commands (add, remove, clear) modyfikuja stan
    query (items, count, total) tylko odczyt, liczone za kazdym razem
    Routy FastAPI leca w threadpoolu, wiec kazdy dostep do _items idzie pod lockiem.
    """

    def __init__(self, catalog: CatalogClient):
        self.catalog = catalog
        self._items: List[CartItem] = []
        self._lock = threading.Lock()

    #query - odczyt
    def items(self) -> List[CartItem]:
        with self._lock:
            return list(self._items)

    def count(self) -> int:
        with self._lock:
            return sum(i.quantity for i in self._items)

    def total(self) -> Decimal:
        with self._lock:
            return sum((i.subtotal for i in self._items), Decimal("0"))

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    #commands
    def add(self, product_id: str) -> CartItem | None:
        product = self.catalog.find(product_id)

        if product is None:
            logger.info(f"Product {product_id} not in catalog snapshot, nothing added")
            return None

        with self._lock:
            for idx, item in enumerate(self._items):
                if item.product.id == product_id:
                    updated = item.model_copy(update={"quantity": item.quantity + 1})
                    self._items[idx] = updated
                    logger.info(
                        f"Product {product_id} already in cart, quantity "
                        f"{item.quantity} -> {updated.quantity}"
                    )
                    return updated

            created = CartItem(product=product, quantity=1)
            self._items.append(created)

        logger.info(f"Product {product_id} added to cart")
        return created

    def remove(self, product_id: str) -> bool:
        #cala pozycja, nie dekrementacja
        with self._lock:
            before = len(self._items)
            self._items = [i for i in self._items if i.product.id != product_id]
            removed = len(self._items) < before

        if removed:
            logger.info(f"Product {product_id} removed from cart")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._items = []
        logger.info("Cart cleared")
