# shophub/services/catalog_client.py
import itertools
import threading
from typing import List, Sequence

from pydantic import ValidationError as SchemaError

from shophub.domain.errors import MalformedResponseError
from shophub.domain.schemas import Product
from shophub.services.api_client import ApiClient
from shophub.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS_PATH = "/api/products"


def filter_products(products: Sequence[Product], query: str) -> List[Product]:
    """Case-insensitive substring match on name or description."""
    if not query:
        return list(products)

    needle = query.lower()
    return [
        p for p in products
        if needle in p.name.lower() or needle in p.description.lower()
    ]


class CatalogClient:
    """
    Pobiera katalog z backendu i trzyma ostatni snapshot.
    Snapshot jest tylko do odczytu, odswiezany w calosci przez refresh().
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self.products: List[Product] = []
        self.loaded = False

        self._tickets = itertools.count(1)
        self._committed = 0
        self._lock = threading.Lock()

    def fetch_catalog(self) -> List[Product]:
        data = self.api.get_json(PRODUCTS_PATH)

        if not isinstance(data, list):
            raise MalformedResponseError("Invalid response format")

        try:
            return [Product.model_validate(row) for row in data]
        except SchemaError as e:
            raise MalformedResponseError(f"Invalid product in response: {e.error_count()} error(s)") from e

    def refresh(self) -> List[Product]:
        with self._lock:
            ticket = next(self._tickets)

        #fetch poza lockiem, requesty moga leciec rownolegle
        products = self.fetch_catalog()

        with self._lock:
            #starsza odpowiedz niz juz zapisana - odrzucamy
            if ticket < self._committed:
                logger.info(f"Discarding stale catalog response (ticket {ticket} < {self._committed})")
                return self.products

            self._committed = ticket
            self.products = products
            self.loaded = True

        logger.info(f"Catalog refreshed: {len(products)} products")
        return products

    def find(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def search(self, query: str) -> List[Product]:
        return filter_products(self.products, query)
