# models/candidate_models.py
from typing import List, Literal, Optional
from pydantic import Field

from pecem_ai.models.base_models import Record, UtcDatetime

CertificationStatus = Literal["active", "expiring", "expired"]
Gender = Literal["feminino", "masculino", "nao-binario", "prefiro-nao-informar", "outro"]


class Coordinates(Record):
    lat: float
    lng: float


class Location(Record):
    city: str = ""
    state: str = ""
    coordinates: Coordinates


class Experience(Record):
    position: str = ""
    company: str = ""
    period: str = ""


class Certification(Record):
    """Catalog entry describing a certification (NR-10, NR-35, ...)."""
    id: str
    name: str
    category: Literal["safety", "operational", "technical"] = "safety"
    validity_period: int = 0  # months
    issuing_body: str = ""


class CandidateCertification(Record):
    certification_id: str
    issue_date: UtcDatetime
    expiry_date: UtcDatetime
    document_url: Optional[str] = None
    verified: bool = False


class Candidate(Record):
    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    location: Location
    is_pcd: bool = Field(default=False, alias="isPCD")
    gender: Optional[Gender] = None
    main_area: str = ""
    profile_completeness: float = 0
    certifications: List[CandidateCertification] = []
    experience: List[Experience] = []
    skills: List[str] = []


class CertificationSummary(Record):
    active: int = 0
    expiring: int = 0
    expired: int = 0
    valid_certifications: List[CandidateCertification] = []
    expired_certifications: List[CandidateCertification] = []
