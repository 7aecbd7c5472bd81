# donorlink/routers/records.py
import logging

from fastapi import APIRouter, Depends

from donorlink.deps import get_repo
from donorlink.exceptions import DonorNotFoundError
from donorlink.schemas import Donor, DonorPreferences, DonationRequest, Organization

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["records"])

# Coordinates and preferences are validated here, on the way in;
# the matcher trusts whatever reaches the store.

@router.post("/donors", response_model=Donor, status_code=201)
async def create_donor(payload: Donor, repo=Depends(get_repo)):
    return await repo.upsert_donor(payload)

@router.patch("/donors/{donor_id}/preferences", response_model=Donor)
async def update_preferences(donor_id: str, payload: DonorPreferences, repo=Depends(get_repo)):
    donor = await repo.update_donor_preferences(donor_id, payload)
    if donor is None:
        raise DonorNotFoundError(donor_id)
    logger.info("Donor %s preferences updated", donor_id)
    return donor

@router.post("/organizations", response_model=Organization, status_code=201)
async def create_organization(payload: Organization, repo=Depends(get_repo)):
    return await repo.upsert_organization(payload)

@router.post("/requests", response_model=DonationRequest, status_code=201)
async def create_request(payload: DonationRequest, repo=Depends(get_repo)):
    return await repo.upsert_request(payload)
