# pcstore/api/errors.py
from fastapi import HTTPException

from pcstore.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

_STATUS = (
    (NotFoundError, 404),
    (ConflictError, 409),  # InvalidStateError też
    (ValidationError, 400),
    (AuthenticationError, 401),
)


def http_error(e: StoreError) -> HTTPException:
    for exc_type, status_code in _STATUS:
        if isinstance(e, exc_type):
            return HTTPException(status_code=status_code, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))
