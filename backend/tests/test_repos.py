import pytest
from mongomock_motor import AsyncMongoMockClient

from donorlink.exceptions import RecordConflictError
from donorlink.repos.inmemory import InMemoryRepo
from donorlink.repos.mongo import MongoRepo, _from_doc, _to_doc
from donorlink.services.matching import find_matches_for_donor
from donorlink.schemas import Donor, DonorPreferences, DonationRequest, Organization


def _donor():
    return Donor(
        id="D1",
        email="donor@example.com",
        location={"latitude": 14.6, "longitude": 120.98},
        preferences={"categories": ["Food"], "maxDistance": 10},
    )

@pytest.mark.anyio
async def test_inmemory_filters_by_status():
    repo = InMemoryRepo()
    loc = {"latitude": 0, "longitude": 0}
    await repo.upsert_organization(Organization(id="A", status="approved", location=loc))
    await repo.upsert_organization(Organization(id="B", status="rejected", location=loc))
    await repo.upsert_request(DonationRequest(id="r1", organizationId="A", category="Food"))
    await repo.upsert_request(DonationRequest(id="r2", organizationId="A", category="Food", status="cancelled"))

    assert [o.id for o in await repo.list_approved_organizations()] == ["A"]
    assert [r.id for r in await repo.list_pending_requests()] == ["r1"]

@pytest.mark.anyio
async def test_inmemory_preference_update_keeps_old_snapshot_intact():
    repo = InMemoryRepo()
    before = await repo.upsert_donor(_donor())
    after = await repo.update_donor_preferences("D1", DonorPreferences(categories=[], maxDistance=3))

    assert after.preferences.max_distance == 3
    assert before.preferences.max_distance == 10
    assert (await repo.get_donor("D1")) == after
    assert await repo.update_donor_preferences("nope", DonorPreferences(maxDistance=1)) is None

def test_mongo_documents_use_record_id_as_key():
    doc = _to_doc(_donor())
    assert doc["_id"] == "D1"
    assert "id" not in doc
    assert doc["preferences"] == {"categories": ["Food"], "maxDistance": 10.0}
    assert Donor.model_validate(_from_doc(doc)) == _donor()

def test_mongo_request_document_keeps_wire_names():
    req = DonationRequest(id="r1", organizationId="A", category="Food", quantity=3)
    doc = _to_doc(req)
    assert doc["organizationId"] == "A"
    assert doc["status"] == "pending"
    assert DonationRequest.model_validate(_from_doc(doc)) == req

@pytest.mark.anyio
async def test_inmemory_rejects_id_shared_across_roles():
    repo = InMemoryRepo()
    await repo.upsert_donor(_donor())
    with pytest.raises(RecordConflictError):
        await repo.upsert_organization(Organization(id="D1", status="approved", location={"latitude": 0, "longitude": 0}))
    assert await repo.list_approved_organizations() == []
    assert (await repo.get_donor("D1")) == _donor()

# --------------------------
# MongoRepo over mongomock-motor
# --------------------------
@pytest.fixture
def mongo_repo():
    return MongoRepo(AsyncMongoMockClient()["donorlink_test"])

async def _seed_mongo(repo):
    await repo.upsert_donor(_donor())
    await repo.upsert_organization(Organization(id="A", status="approved", location={"latitude": 14.6, "longitude": 120.98}))
    await repo.upsert_organization(Organization(id="P", status="pending", location={"latitude": 14.6, "longitude": 120.98}))
    await repo.upsert_organization(Organization(id="B", status="rejected", location={"latitude": 14.6, "longitude": 120.98}))
    await repo.upsert_request(DonationRequest(id="r1", organizationId="A", category="Food"))
    await repo.upsert_request(DonationRequest(id="r2", organizationId="A", category="Toys"))
    await repo.upsert_request(DonationRequest(id="r3", organizationId="A", category="Food", status="cancelled"))

@pytest.mark.anyio
async def test_mongo_filters_by_role_and_status(mongo_repo):
    await _seed_mongo(mongo_repo)

    orgs = await mongo_repo.list_approved_organizations()
    assert [o.id for o in orgs] == ["A"]
    assert orgs[0].status == "approved"
    assert sorted(r.id for r in await mongo_repo.list_pending_requests()) == ["r1", "r2"]

@pytest.mark.anyio
async def test_mongo_get_donor_only_returns_donors(mongo_repo):
    await _seed_mongo(mongo_repo)

    assert (await mongo_repo.get_donor("D1")) == _donor()
    assert await mongo_repo.get_donor("A") is None
    assert await mongo_repo.get_donor("missing") is None

@pytest.mark.anyio
async def test_mongo_preference_update_returns_updated_donor(mongo_repo):
    await _seed_mongo(mongo_repo)

    after = await mongo_repo.update_donor_preferences("D1", DonorPreferences(categories=["Toys"], maxDistance=5))
    assert after.preferences.categories == ["Toys"]
    assert after.preferences.max_distance == 5
    assert (await mongo_repo.get_donor("D1")) == after
    # organizations are never treated as donors
    assert await mongo_repo.update_donor_preferences("A", DonorPreferences(maxDistance=1)) is None
    assert await mongo_repo.update_donor_preferences("nope", DonorPreferences(maxDistance=1)) is None

@pytest.mark.anyio
async def test_mongo_upsert_replaces_same_role_record(mongo_repo):
    await _seed_mongo(mongo_repo)
    await mongo_repo.upsert_organization(Organization(id="P", status="approved", location={"latitude": 14.6, "longitude": 120.98}))

    assert sorted(o.id for o in await mongo_repo.list_approved_organizations()) == ["A", "P"]

@pytest.mark.anyio
async def test_mongo_rejects_id_shared_across_roles(mongo_repo):
    await _seed_mongo(mongo_repo)

    with pytest.raises(RecordConflictError):
        await mongo_repo.upsert_organization(Organization(id="D1", status="approved", location={"latitude": 0, "longitude": 0}))
    with pytest.raises(RecordConflictError):
        await mongo_repo.upsert_donor(_donor().model_copy(update={"id": "A"}))

    assert (await mongo_repo.get_donor("D1")) == _donor()
    assert [o.id for o in await mongo_repo.list_approved_organizations()] == ["A"]

@pytest.mark.anyio
async def test_find_matches_for_donor_over_mongo(mongo_repo):
    await _seed_mongo(mongo_repo)

    [m] = await find_matches_for_donor(mongo_repo, "D1")
    assert m.organization_id == "A"
    assert m.distance == 0.0
    assert m.score == 125.0
    assert [r.id for r in m.requests] == ["r1"]

    await mongo_repo.update_donor_preferences("D1", DonorPreferences(categories=["Toys"], maxDistance=5))
    [m] = await find_matches_for_donor(mongo_repo, "D1")
    assert m.matching_categories == ["Toys"]
    assert [r.id for r in m.requests] == ["r2"]
