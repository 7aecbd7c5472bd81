# donorlink/services/matching.py
import logging
from math import radians, sin, cos, atan2, sqrt
from typing import Iterable, List, Optional, Tuple

from donorlink.exceptions import DonorNotFoundError
from donorlink.schemas import Donor, DonationRequest, MatchResult, Organization

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

# Weighting policy; keep verbatim for compatibility with stored rankings
DISTANCE_SCORE_MAX = 100.0
DISTANCE_DECAY_PER_KM = 10.0
CATEGORY_SCORE_MAX = 50.0

def haversine_km(lat1, lon1, lat2, lon2) -> float:
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat/2)**2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c

def distance_score(distance_km: float) -> float:
    # linear decay, 0 from 10 km out
    return max(0.0, DISTANCE_SCORE_MAX - distance_km * DISTANCE_DECAY_PER_KM)

def category_score(matching_count: int, total_count: int) -> float:
    """Share of the org's pending requests the donor cares about, scaled to 50.

    An org with no pending requests scores 0 here rather than failing.
    """
    if total_count <= 0:
        return 0.0
    return (matching_count / total_count) * CATEGORY_SCORE_MAX

def compute_score(distance_km: float, matching_count: int, total_count: int) -> float:
    return distance_score(distance_km) + category_score(matching_count, total_count)

def unique_categories(requests: Iterable[DonationRequest]) -> List[str]:
    seen = []
    for r in requests:
        if r.category not in seen:
            seen.append(r.category)
    return seen

def filter_candidates(
    donor: Donor,
    organizations: Iterable[Organization],
    requests: Iterable[DonationRequest],
) -> List[Tuple[Organization, float, List[DonationRequest], List[DonationRequest]]]:
    """
    Keep approved orgs inside the donor's max distance.
    Returns (org, distance_km, org_requests, matching_requests) per survivor,
    where org_requests are all its pending requests and matching_requests
    the subset whose category the donor prefers.
    """
    wanted = set(donor.preferences.categories)
    max_km = donor.preferences.max_distance

    by_org = {}
    for r in requests:
        if r.status != "pending":
            continue
        by_org.setdefault(r.organization_id, []).append(r)

    out = []
    for org in organizations:
        if org.status != "approved":
            continue
        dist = haversine_km(
            donor.location.latitude, donor.location.longitude,
            org.location.latitude, org.location.longitude,
        )
        if dist > max_km:
            continue
        org_requests = by_org.get(org.id, [])
        matching = [r for r in org_requests if r.category in wanted]
        out.append((org, dist, org_requests, matching))
    return out

def match_sort_key(m: MatchResult):
    # score desc, then org id asc so equal scores come out in a stable order
    return (-m.score, m.organization_id)

def find_matches(
    donor: Donor,
    organizations: Iterable[Organization],
    requests: Iterable[DonationRequest],
) -> List[MatchResult]:
    """
    Rank approved organizations for a donor.

    Pure function over the snapshot it is handed: no I/O, no clock, no
    shared state. Every surviving org is returned, best first.
    """
    candidates = filter_candidates(donor, organizations, requests)

    results = []
    for org, dist, org_requests, matching in candidates:
        results.append(MatchResult(
            organization_id=org.id,
            organization=org,
            score=compute_score(dist, len(matching), len(org_requests)),
            distance=dist,
            matching_categories=unique_categories(matching),
            requests=matching,
        ))

    results.sort(key=match_sort_key)
    logger.debug("donor=%s candidates=%d", donor.id, len(results))
    return results

async def load_snapshot(repo, donor_id: str) -> Tuple[Donor, List[Organization], List[DonationRequest]]:
    donor: Optional[Donor] = await repo.get_donor(donor_id)
    if donor is None:
        raise DonorNotFoundError(donor_id)
    organizations = await repo.list_approved_organizations()
    requests = await repo.list_pending_requests()
    return donor, organizations, requests

async def find_matches_for_donor(repo, donor_id: str) -> List[MatchResult]:
    """
    Resolve the donor's snapshot from the store and rank it.
    Store errors are logged and re-raised; nothing is retried.
    """
    try:
        donor, organizations, requests = await load_snapshot(repo, donor_id)
    except DonorNotFoundError:
        raise
    except Exception:
        logger.exception("Error loading match snapshot for donor %s", donor_id)
        raise

    matches = find_matches(donor, organizations, requests)
    logger.info(
        "Matched donor %s: %d of %d organizations within %.1f km",
        donor_id, len(matches), len(organizations), donor.preferences.max_distance,
    )
    return matches
