import asyncio

from donorlink.core.db import get_db
from donorlink.repos.mongo import MongoRepo
from donorlink.schemas import Donor, DonationRequest, Organization

DONOR = {
    "id": "D1",
    "name": "Donor A",
    "location": {"latitude": 14.60, "longitude": 120.98, "address": "Ermita, Manila"},
    "preferences": {"categories": ["Food", "Clothing"], "maxDistance": 15},
}

ORGS = [
    {"id": "O1", "name": "Ermita Pantry", "status": "approved",
     "location": {"latitude": 14.61, "longitude": 121.00}},
    {"id": "O2", "name": "Pasig Shelter", "status": "approved",
     "location": {"latitude": 14.58, "longitude": 121.06}},
    {"id": "O3", "name": "Awaiting Review", "status": "pending",
     "location": {"latitude": 14.60, "longitude": 120.98}},
]

REQUESTS = [
    {"id": "Q1", "organizationId": "O1", "title": "Rice", "category": "Food", "quantity": 20},
    {"id": "Q2", "organizationId": "O1", "title": "Notebooks", "category": "Education", "quantity": 50},
    {"id": "Q3", "organizationId": "O2", "title": "Blankets", "category": "Clothing", "quantity": 30},
]

async def main():
    repo = MongoRepo(get_db())
    await repo.ensure_indexes()
    await repo.upsert_donor(Donor.model_validate(DONOR))
    for o in ORGS:
        await repo.upsert_organization(Organization.model_validate(o))
    for r in REQUESTS:
        await repo.upsert_request(DonationRequest.model_validate(r))
    print(f"Seeded: D1, {len(ORGS)} orgs, {len(REQUESTS)} requests")

if __name__ == "__main__":
    asyncio.run(main())
