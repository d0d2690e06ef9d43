# shophub/api/routers/health.py
from fastapi import APIRouter, Depends

from shophub.api import get_session
from shophub.services.session import StorefrontSession

router = APIRouter(tags=["health"])


@router.get("/health")
def health(session: StorefrontSession = Depends(get_session)):
    return {"status": "ok", "backend": session.api.base_url}
