# donorlink/routers/matching.py
from typing import List

from fastapi import APIRouter, Depends

from donorlink.deps import get_repo
from donorlink.schemas import MatchResult, MatchSnapshot
from donorlink.services.matching import find_matches, find_matches_for_donor

router = APIRouter(prefix="/api/matching", tags=["matching"])

@router.get("/donors/{donor_id}", response_model=List[MatchResult])
async def matches_for_donor(donor_id: str, repo=Depends(get_repo)):
    # DonorNotFoundError -> 404 via the registered exception handler
    return await find_matches_for_donor(repo, donor_id)

@router.post("/preview", response_model=List[MatchResult])
async def preview(snapshot: MatchSnapshot):
    """Rank a caller-supplied snapshot without touching the store."""
    return find_matches(snapshot.donor, snapshot.organizations, snapshot.requests)
