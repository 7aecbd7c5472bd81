# donorlink/repos/mongo.py
from typing import Optional, List, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from donorlink.exceptions import RecordConflictError
from donorlink.schemas import Donor, DonorPreferences, DonationRequest, Organization

def _to_doc(record) -> Dict:
    doc = record.model_dump(by_alias=True, exclude_none=True)
    doc["_id"] = doc.pop("id")
    return doc

def _from_doc(doc: Dict) -> Dict:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc

class MongoRepo:
    """
    Donors and organizations share the `users` collection (told apart by
    `role`); requests live in `requests`. Record ids are stored as `_id`.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def ensure_indexes(self):
        await self.db.users.create_index([("role", ASCENDING), ("status", ASCENDING)], name="role_1_status_1")
        await self.db.requests.create_index([("status", ASCENDING)], name="status_1")

    async def _upsert_user(self, record):
        doc = _to_doc(record)
        # an id is owned by one role; never let an org overwrite a donor or back
        other = await self.db.users.find_one({"_id": doc["_id"], "role": {"$ne": doc["role"]}})
        if other:
            raise RecordConflictError(doc["_id"], other.get("role", "user"))
        await self.db.users.replace_one({"_id": doc["_id"], "role": doc["role"]}, doc, upsert=True)
        return record

    # Donors
    async def upsert_donor(self, donor: Donor) -> Donor:
        return await self._upsert_user(donor)

    async def get_donor(self, donor_id: str) -> Optional[Donor]:
        doc = await self.db.users.find_one({"_id": donor_id, "role": "donor"})
        return Donor.model_validate(_from_doc(doc)) if doc else None

    async def update_donor_preferences(self, donor_id: str, preferences: DonorPreferences) -> Optional[Donor]:
        doc = await self.db.users.find_one_and_update(
            {"_id": donor_id, "role": "donor"},
            {"$set": {"preferences": preferences.model_dump(by_alias=True)}},
            return_document=ReturnDocument.AFTER,
        )
        return Donor.model_validate(_from_doc(doc)) if doc else None

    # Organizations
    async def upsert_organization(self, org: Organization) -> Organization:
        return await self._upsert_user(org)

    async def list_approved_organizations(self) -> List[Organization]:
        cur = self.db.users.find({"role": "organization", "status": "approved"})
        return [Organization.model_validate(_from_doc(d)) async for d in cur]

    # Requests
    async def upsert_request(self, req: DonationRequest) -> DonationRequest:
        doc = _to_doc(req)
        await self.db.requests.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        return req

    async def list_pending_requests(self) -> List[DonationRequest]:
        cur = self.db.requests.find({"status": "pending"})
        return [DonationRequest.model_validate(_from_doc(d)) async for d in cur]
