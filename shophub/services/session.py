# shophub/services/session.py
from shophub.services.admin_service import AdminMutator
from shophub.services.api_client import ApiClient
from shophub.services.cart_service import CartStore
from shophub.services.catalog_client import CatalogClient


class StorefrontSession:
    """Jedna sesja przegladarki: klient HTTP, katalog, koszyk i formularz admina."""

    def __init__(self, api: ApiClient | None = None):
        self.api = api or ApiClient()
        self.catalog = CatalogClient(self.api)
        self.cart = CartStore(self.catalog)
        self.admin = AdminMutator(self.api, self.catalog)

    def ensure_catalog(self, force: bool = False):
        if force or not self.catalog.loaded:
            return self.catalog.refresh()
        return self.catalog.products
