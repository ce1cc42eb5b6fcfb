"""Response conventions for the company intelligence API.

CONVENTIONS
-----------

1. GET single resource:
   Return StandardResponse with the object dict as ``data``.
   Example: {"status": "success", "data": {"id": 1, "name": "Acme Corp"}}

2. GET collection (page-numbered):
   Return: {"status": "success", "data": [...], "total": int, "page": int, "limit": int}

3. GET collection (unpaginated):
   Return: {"status": "success", "data": [...], "total": int}

4. POST/PUT/PATCH mutation:
   Return StandardResponse with the created or updated dict as ``data``.

5. DELETE:
   Return: {"status": "success", "message": "..."}

ERRORS
------
Services raise the ``src.core.errors`` hierarchy; routers translate with
``http_error`` into a FastAPI HTTPException, which returns:
   {"detail": "Human-readable error message"}

STATUS CODES
------------
- 200: Success
- 400: Validation error
- 401: Missing or invalid credentials
- 403: Role does not allow the action
- 404: Resource not found
- 409: Duplicate entry
- 500: Storage or unexpected failure
"""

import json
from typing import Any, Dict, List
from urllib.parse import quote

from fastapi import HTTPException, Response

from src.core.errors import (
    AuthenticationError,
    ConfigurationError,
    DuplicateEntryError,
    IntelError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

# Most specific first: DuplicateEntryError is a ValidationError.
ERROR_STATUS = [
    (DuplicateEntryError, 409),
    (NotFoundError, 404),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (PermissionDeniedError, 403),
    (StorageError, 500),
    (ConfigurationError, 500),
]


def http_error(exc: IntelError) -> HTTPException:
    """Translate a service error into the matching HTTPException."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def paginated(data: List[Dict], total: int, page: int, limit: int) -> Dict[str, Any]:
    """Wrap a list result in the page-numbered envelope."""
    return {
        "status": "success",
        "data": data,
        "total": total,
        "page": page,
        "limit": limit,
    }


def collection(data: List[Dict]) -> Dict[str, Any]:
    """Wrap an unpaginated list result."""
    return {
        "status": "success",
        "data": data,
        "total": len(data),
    }


def success(message: str = "OK", **extra) -> Dict[str, Any]:
    """Standard mutation response."""
    return {"status": "success", "message": message, **extra}


def content_disposition(filename: str) -> str:
    """
    ``attachment`` header value that survives non-latin-1 filenames.

    Starlette encodes headers as latin-1, so the plain ``filename`` is an ASCII
    fallback and the real name travels in the RFC 5987 ``filename*`` parameter.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "_").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def json_attachment(payload: Any, filename: str) -> Response:
    """Pretty-printed JSON download."""
    return Response(
        content=json.dumps(payload, indent=2, default=str),
        media_type="application/json",
        headers={"Content-Disposition": content_disposition(filename)},
    )
