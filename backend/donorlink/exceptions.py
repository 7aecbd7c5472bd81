"""
Service-layer exceptions and the FastAPI handlers that translate them.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DonorLinkError(Exception):
    """Base exception for service layer errors."""
    status_code = 400


class DonorNotFoundError(DonorLinkError):
    """Raised when a donor id does not resolve to a donor record."""

    def __init__(self, donor_id: str):
        super().__init__(f"Donor not found: {donor_id}")
        self.donor_id = donor_id


class RecordConflictError(DonorLinkError):
    """Raised when an id is already held by a record of another role."""
    status_code = 409

    def __init__(self, record_id: str, role: str):
        super().__init__(f"Id {record_id} already belongs to a {role}")
        self.record_id = record_id
        self.role = role


async def donor_not_found_handler(request: Request, exc: DonorNotFoundError) -> JSONResponse:
    logger.info("Donor %s not found (%s)", exc.donor_id, request.url.path)
    return JSONResponse(status_code=404, content={"detail": "Donor not found"})


async def service_error_handler(request: Request, exc: DonorLinkError) -> JSONResponse:
    logger.error("Service error in %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DonorNotFoundError, donor_not_found_handler)
    app.add_exception_handler(DonorLinkError, service_error_handler)
