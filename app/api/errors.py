"""
HTTP error mapping.

- invalid input      -> 400 {"detail": "Invalid <kind> data", "errors": [...]}
- missing record     -> 404 via HTTPException in the routers
- domain still used  -> 409
- anything else      -> 500 with no internal detail
"""
import logging
from typing import Dict, List, Optional, Sequence

from fastapi import status
from fastapi.responses import JSONResponse

from app.core.interfaces import IStorage

logger = logging.getLogger(__name__)

# Path segment -> resource kind used in error messages
RESOURCE_KINDS = {
    "domains": "domain",
    "articles": "article",
    "projects": "project",
}


class InvalidDataError(Exception):
    """Request data failed a check that pydantic cannot express"""

    def __init__(self, kind: str, errors: List[Dict[str, str]]):
        self.kind = kind
        self.errors = errors
        super().__init__(f"Invalid {kind} data: {errors}")


def resource_kind(path: str) -> str:
    """Resource kind for a request path, e.g. /api/articles/123 -> article"""
    for segment in path.strip("/").split("/"):
        if segment in RESOURCE_KINDS:
            return RESOURCE_KINDS[segment]
    return "request"


def format_validation_errors(errors: Sequence[dict]) -> List[Dict[str, str]]:
    """
    Flatten pydantic errors to {"field", "message"} pairs.

    The leading location part ("body", "query", "path") is dropped unless it
    is the whole location (e.g. a missing body).
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        formatted.append({"field": field, "message": error.get("msg", "Invalid value")})
    return formatted


def invalid_data_response(kind: str, errors: List[Dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Invalid {kind} data", "errors": errors},
    )


async def check_domain_reference(storage: IStorage, domain_id: Optional[str], kind: str) -> None:
    """
    Reject a domainId that names no existing domain.

    Raises:
        InvalidDataError: If the domain doesn't exist
    """
    if domain_id is None:
        return
    if await storage.get_domain(domain_id) is None:
        logger.warning(f"Rejected {kind} referencing unknown domain {domain_id}")
        raise InvalidDataError(kind, [{"field": "domainId", "message": f"Domain '{domain_id}' does not exist"}])
