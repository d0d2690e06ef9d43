# shophub/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal


class Product(BaseModel):
    """Produkt tak jak zwraca go backend (klucz `_id` na wire)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(..., alias="_id", min_length=1)
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0)
    imageUrl: str = ""
    category: str = ""
    rating: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0)


class CartItem(BaseModel):
    """Pozycja koszyka: produkt + ilosc (zawsze >= 1)."""

    product: Product
    quantity: int = Field(..., ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu z katalogu")


class CartItemOut(BaseModel):
    product_id: str
    name: str
    imageUrl: str
    quantity: int
    price: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    items: List[CartItemOut]
    count: int
    total: Decimal


class ProductOut(BaseModel):
    """Produkt w odpowiedzi API (bez aliasu `_id`)."""

    id: str
    name: str
    description: str
    price: Decimal
    imageUrl: str
    category: str
    rating: float
    reviews: int

    model_config = ConfigDict(from_attributes=True)


class DraftPatch(BaseModel):
    """Czesciowa zmiana pol formularza admina."""

    name: str | None = None
    description: str | None = None
    price: str | None = None
    imageUrl: str | None = None
    category: str | None = None


class DraftOut(BaseModel):
    mode: str
    target_id: str | None = None
    name: str
    description: str
    price: str
    imageUrl: str
    category: str
    image_filename: str | None = None
