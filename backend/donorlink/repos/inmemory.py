# donorlink/repos/inmemory.py
from typing import Optional, List, Dict

from donorlink.exceptions import RecordConflictError
from donorlink.schemas import Donor, DonorPreferences, DonationRequest, Organization

class InMemoryRepo:
    """Keyed-record store backed by dicts; insertion order is retrieval order."""

    def __init__(self):
        self.donors: Dict[str, Donor] = {}
        self.organizations: Dict[str, Organization] = {}
        self.requests: Dict[str, DonationRequest] = {}

    # Donors
    async def upsert_donor(self, donor: Donor) -> Donor:
        if donor.id in self.organizations:
            raise RecordConflictError(donor.id, "organization")
        self.donors[donor.id] = donor
        return donor

    async def get_donor(self, donor_id: str) -> Optional[Donor]:
        return self.donors.get(donor_id)

    async def update_donor_preferences(self, donor_id: str, preferences: DonorPreferences) -> Optional[Donor]:
        donor = self.donors.get(donor_id)
        if donor is None:
            return None
        updated = donor.model_copy(update={"preferences": preferences})
        self.donors[donor_id] = updated
        return updated

    # Organizations
    async def upsert_organization(self, org: Organization) -> Organization:
        if org.id in self.donors:
            raise RecordConflictError(org.id, "donor")
        self.organizations[org.id] = org
        return org

    async def list_approved_organizations(self) -> List[Organization]:
        return [o for o in self.organizations.values() if o.status == "approved"]

    # Requests
    async def upsert_request(self, req: DonationRequest) -> DonationRequest:
        self.requests[req.id] = req
        return req

    async def list_pending_requests(self) -> List[DonationRequest]:
        return [r for r in self.requests.values() if r.status == "pending"]

    def clear(self):
        self.donors.clear()
        self.organizations.clear()
        self.requests.clear()
