# shophub/api/__init__.py
from fastapi import HTTPException, Request

from shophub.domain.errors import (
    DraftNotActiveError,
    MalformedResponseError,
    NetworkError,
    ServerError,
    StorefrontError,
    ValidationError,
)
from shophub.services.session import StorefrontSession

_STATUS = (
    (ValidationError, 400),
    (DraftNotActiveError, 409),
    (ServerError, 502),
    (MalformedResponseError, 502),
    (NetworkError, 503),
)


def get_session(request: Request) -> StorefrontSession:
    return request.app.state.session


def http_error(e: StorefrontError) -> HTTPException:
    for exc_type, status in _STATUS:
        if isinstance(e, exc_type):
            return HTTPException(status_code=status, detail=e.message)
    return HTTPException(status_code=500, detail=e.message)
