from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, EmailStr, Field

# --------------------------
# Shared Submodels
# --------------------------
OrganizationStatus = Literal["pending", "approved", "rejected"]
RequestStatus = Literal["pending", "accepted", "fulfilled", "cancelled", "completed"]
Priority = Literal["low", "medium", "high"]

class Record(BaseModel):
    # Wire format is camelCase; python attributes are snake_case
    model_config = ConfigDict(populate_by_name=True)

class Location(Record):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: Optional[str] = None

class DonorPreferences(Record):
    categories: List[str] = []
    max_distance: float = Field(gt=0, alias="maxDistance")  # km

# --------------------------
# Users
# --------------------------
class Donor(Record):
    id: str
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Literal["donor"] = "donor"
    location: Location
    preferences: DonorPreferences
    created_at: Optional[str] = Field(default=None, alias="createdAt")

class Organization(Record):
    id: str
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Literal["organization"] = "organization"
    status: OrganizationStatus = "pending"
    location: Location
    contact_person: Optional[str] = Field(default=None, alias="contactPerson")
    contact_phone: Optional[str] = Field(default=None, alias="contactPhone")
    description: Optional[str] = None
    website: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")

# --------------------------
# Requests
# --------------------------
class DonationRequest(Record):
    id: str
    organization_id: str = Field(alias="organizationId")
    organization_name: Optional[str] = Field(default=None, alias="organizationName")
    title: Optional[str] = None
    description: Optional[str] = None
    category: str
    quantity: Optional[float] = None
    priority: Priority = "medium"
    status: RequestStatus = "pending"
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    target_amount: Optional[float] = Field(default=None, alias="targetAmount")
    current_amount: Optional[float] = Field(default=None, alias="currentAmount")

# --------------------------
# Matching
# --------------------------
class MatchResult(Record):
    organization_id: str = Field(alias="organizationId")
    organization: Organization
    score: float
    distance: float  # km
    matching_categories: List[str] = Field(default_factory=list, alias="matchingCategories")
    requests: List[DonationRequest] = Field(default_factory=list)

class MatchSnapshot(Record):
    donor: Donor
    organizations: List[Organization] = []
    requests: List[DonationRequest] = []
