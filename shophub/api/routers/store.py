# shophub/api/routers/store.py
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from shophub.api import get_session, http_error
from shophub.domain.errors import StorefrontError
from shophub.domain.schemas import CartItemOut, CartOut, ItemIn, Product, ProductOut
from shophub.services.session import StorefrontSession

router = APIRouter(prefix="/store", tags=["store"])

CENT = Decimal("0.01")


def product_out(product: Product) -> ProductOut:
    return ProductOut(**product.model_dump())


def cart_out(session: StorefrontSession) -> CartOut:
    #zaokraglenie tylko tutaj, przy prezentacji
    return CartOut(
        items=[
            CartItemOut(
                product_id=i.product.id,
                name=i.product.name,
                imageUrl=i.product.imageUrl,
                quantity=i.quantity,
                price=i.product.price,
            )
            for i in session.cart.items()
        ],
        count=session.cart.count(),
        total=session.cart.total().quantize(CENT),
    )


@router.get("/products", response_model=List[ProductOut])
def list_products(
    q: str = Query(""),
    refresh: bool = Query(False),
    session: StorefrontSession = Depends(get_session),
):
    try:
        session.ensure_catalog(force=refresh)
    except StorefrontError as e:
        raise http_error(e)
    return [product_out(p) for p in session.catalog.search(q)]


@router.get("/cart", response_model=CartOut)
def get_cart(session: StorefrontSession = Depends(get_session)):
    return cart_out(session)


@router.post("/cart/items", response_model=CartOut)
def add_item(payload: ItemIn, session: StorefrontSession = Depends(get_session)):
    if session.cart.add(payload.product_id) is None:
        raise HTTPException(status_code=404, detail=f"Product {payload.product_id} not found in catalog")
    return cart_out(session)


@router.delete("/cart/items/{product_id}", response_model=CartOut)
def remove_item(product_id: str, session: StorefrontSession = Depends(get_session)):
    session.cart.remove(product_id)
    return cart_out(session)


@router.delete("/cart", response_model=CartOut)
def clear_cart(session: StorefrontSession = Depends(get_session)):
    session.cart.clear()
    return cart_out(session)
