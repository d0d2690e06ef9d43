# shophub/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from shophub.api import get_session, http_error
from shophub.api.routers.store import product_out
from shophub.domain.errors import StorefrontError
from shophub.domain.schemas import DraftOut, DraftPatch, ProductOut
from shophub.services.admin_service import AdminFormDraft
from shophub.services.session import StorefrontSession

router = APIRouter(prefix="/admin", tags=["admin"])


def draft_out(draft: AdminFormDraft | None) -> DraftOut | None:
    if draft is None:
        return None
    return DraftOut(
        mode=draft.mode.value,
        target_id=draft.target_id,
        name=draft.name,
        description=draft.description,
        price=draft.price,
        imageUrl=draft.imageUrl,
        category=draft.category,
        image_filename=draft.image.filename if draft.image else None,
    )


@router.get("/products", response_model=List[ProductOut])
def list_products(session: StorefrontSession = Depends(get_session)):
    try:
        products = session.ensure_catalog(force=True)
    except StorefrontError as e:
        raise http_error(e)
    return [product_out(p) for p in products]


@router.get("/draft", response_model=DraftOut | None)
def get_draft(session: StorefrontSession = Depends(get_session)):
    return draft_out(session.admin.draft)


@router.post("/draft", response_model=DraftOut)
def start_create(session: StorefrontSession = Depends(get_session)):
    return draft_out(session.admin.start_create())


@router.post("/products/{product_id}/draft", response_model=DraftOut)
def start_edit(product_id: str, session: StorefrontSession = Depends(get_session)):
    try:
        return draft_out(session.admin.start_edit(product_id))
    except StorefrontError as e:
        raise http_error(e)


@router.post("/draft/submit", response_model=ProductOut)
def submit_draft(session: StorefrontSession = Depends(get_session)):
    """
    Create albo update, zaleznie od trybu draftu.
    Przy bledzie draft zostaje bez zmian, mozna poprawic i wyslac ponownie.
    """
    try:
        product = session.admin.submit()
    except StorefrontError as e:
        raise http_error(e)
    return product_out(product)


@router.patch("/draft", response_model=DraftOut)
def update_draft(payload: DraftPatch, session: StorefrontSession = Depends(get_session)):
    try:
        return draft_out(session.admin.update_draft(**payload.model_dump(exclude_none=True)))
    except StorefrontError as e:
        raise http_error(e)


@router.put("/draft/image", response_model=DraftOut)
def attach_image(
    image: UploadFile = File(...),
    session: StorefrontSession = Depends(get_session),
):
    try:
        return draft_out(
            session.admin.attach_image(
                filename=image.filename or "image",
                content=image.file.read(),
                content_type=image.content_type,
            )
        )
    except StorefrontError as e:
        raise http_error(e)


@router.delete("/draft/image", response_model=DraftOut)
def detach_image(session: StorefrontSession = Depends(get_session)):
    try:
        return draft_out(session.admin.detach_image())
    except StorefrontError as e:
        raise http_error(e)


@router.delete("/draft", status_code=204)
def cancel_draft(session: StorefrontSession = Depends(get_session)):
    session.admin.cancel()


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: str, session: StorefrontSession = Depends(get_session)):
    try:
        session.admin.delete(product_id)
    except StorefrontError as e:
        raise http_error(e)
