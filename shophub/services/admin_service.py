# shophub/services/admin_service.py
import json
import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict

from pydantic import ValidationError as SchemaError

from shophub.domain.errors import (
    DraftNotActiveError,
    MalformedResponseError,
    StorefrontError,
    ValidationError,
)
from shophub.domain.schemas import Product
from shophub.services.api_client import ApiClient
from shophub.services.catalog_client import PRODUCTS_PATH, CatalogClient
from shophub.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "description", "price", "category")
DRAFT_FIELDS = ("name", "description", "price", "imageUrl", "category")

#zwykly zapis dziesietny: bez wykladnika, podkreslen i cyfr spoza ASCII
PRICE_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


class DraftMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class DraftImage:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class AdminFormDraft:
    mode: DraftMode = DraftMode.CREATE
    target_id: str | None = None
    name: str = ""
    description: str = ""
    price: str = ""
    imageUrl: str = ""
    category: str = ""
    image: DraftImage | None = field(default=None, repr=False)

    @classmethod
    def from_product(cls, product: Product) -> "AdminFormDraft":
        return cls(
            mode=DraftMode.UPDATE,
            target_id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            imageUrl=product.imageUrl,
            category=product.category,
        )


def parse_price(text: str) -> float:
    if not isinstance(text, str) or not PRICE_RE.fullmatch(text.strip()):
        raise ValidationError("Price must be a non-negative decimal number", field="price")

    value = float(text.strip())
    if not math.isfinite(value):
        raise ValidationError("Price is out of range", field="price")

    return value


def validate_draft(draft: AdminFormDraft) -> None:
    for name in REQUIRED_FIELDS:
        if not getattr(draft, name).strip():
            raise ValidationError(f"Field '{name}' is required", field=name)

    parse_price(draft.price)

    if draft.mode is DraftMode.UPDATE and not draft.target_id:
        raise ValidationError("Product id is required to update a product", field="target_id")


def build_form(draft: AdminFormDraft) -> tuple[Dict[str, str], Dict[str, Any] | None]:
    """
    Multipart body dla POST/PUT /api/products.
    Cena leci jako tekst, backend decyduje o konwersji.
    Plik ma pierwszenstwo przed imageUrl, zadne z nich nie jest wymagane.
    """
    data = {
        "name": draft.name.strip(),
        "description": draft.description.strip(),
        "price": draft.price.strip(),
        "category": draft.category.strip(),
        "colors": json.dumps([]),
        "features": json.dumps([]),
    }
    files = None

    if draft.image is not None:
        files = {
            "image": (draft.image.filename, draft.image.content, draft.image.content_type),
        }
    elif draft.imageUrl.strip():
        data["imageUrl"] = draft.imageUrl.strip()

    return data, files


class AdminMutator:
    """
    Formularz admina (jeden draft naraz) + create/update/delete na backendzie.
    Po udanej mutacji caly katalog jest pobierany od nowa, bez lokalnego patchowania.
    """

    def __init__(self, api: ApiClient, catalog: CatalogClient):
        self.api = api
        self.catalog = catalog
        self.draft: AdminFormDraft | None = None

    #draft - przejscia stanu
    def start_create(self) -> AdminFormDraft:
        if self.draft is not None:
            logger.info("Discarding unsaved draft, starting a new product")
        self.draft = AdminFormDraft()
        return self.draft

    def start_edit(self, product_id: str) -> AdminFormDraft:
        product = self.catalog.find(product_id)
        if product is None:
            raise ValidationError(f"Product {product_id} not found in catalog", field="target_id")

        if self.draft is not None:
            logger.info(f"Discarding unsaved draft, editing product {product_id}")
        self.draft = AdminFormDraft.from_product(product)
        return self.draft

    def update_draft(self, **fields: str) -> AdminFormDraft:
        draft = self._active_draft()

        unknown = set(fields) - set(DRAFT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown draft field(s): {', '.join(sorted(unknown))}")

        self.draft = replace(draft, **{k: v for k, v in fields.items() if v is not None})
        return self.draft

    def attach_image(self, filename: str, content: bytes, content_type: str | None = None) -> AdminFormDraft:
        draft = self._active_draft()
        image = DraftImage(filename, content, content_type or "application/octet-stream")
        self.draft = replace(draft, image=image)
        return self.draft

    def detach_image(self) -> AdminFormDraft:
        self.draft = replace(self._active_draft(), image=None)
        return self.draft

    def cancel(self) -> None:
        if self.draft is not None:
            logger.info("Draft cancelled")
        self.draft = None

    #commands
    def submit(self) -> Product:
        draft = self._active_draft()
        validate_draft(draft)

        data, files = build_form(draft)

        if draft.mode is DraftMode.UPDATE:
            method, path = "PUT", f"{PRODUCTS_PATH}/{draft.target_id}"
        else:
            method, path = "POST", PRODUCTS_PATH

        logger.info(f"Submitting draft ({draft.mode.value}) via {method} {path}")
        body = self.api.send_form(method, path, data=data, files=files)

        try:
            product = Product.model_validate(body)
        except SchemaError as e:
            raise MalformedResponseError("Invalid product in response") from e

        #sukces - draft do kosza, katalog od nowa
        self.draft = None
        logger.info(f"Product {product.id} saved ({draft.mode.value})")
        self._refetch()

        return product

    def delete(self, product_id: str) -> None:
        logger.info(f"Deleting product {product_id}")
        self.api.delete(f"{PRODUCTS_PATH}/{product_id}")
        self._refetch()

    def _active_draft(self) -> AdminFormDraft:
        if self.draft is None:
            raise DraftNotActiveError("No product form is open")
        return self.draft

    def _refetch(self) -> None:
        try:
            self.catalog.refresh()
        except StorefrontError as e:
            logger.warning(f"Catalog refresh after mutation failed: {e.message}")
