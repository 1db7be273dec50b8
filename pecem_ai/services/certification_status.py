# pecem_ai/services/certification_status.py
import math
from datetime import datetime, timezone
from typing import List, Optional

from pecem_ai import config
from pecem_ai.models.candidate_models import (
    Candidate,
    CandidateCertification,
    CertificationStatus,
    CertificationSummary,
)

SECONDS_PER_DAY = 86400


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Current UTC time unless the caller pins a clock (naive values are UTC)."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def get_days_until_expiry(cert: CandidateCertification, now: Optional[datetime] = None) -> int:
    """Whole days until expiry, floored; negative once expired."""
    delta = cert.expiry_date - resolve_now(now)
    return math.floor(delta.total_seconds() / SECONDS_PER_DAY)


def get_certification_status(
    cert: CandidateCertification, now: Optional[datetime] = None
) -> CertificationStatus:
    days = get_days_until_expiry(cert, now)
    if days < 0:
        return "expired"
    if days < config.EXPIRING_WINDOW_DAYS:
        return "expiring"
    return "active"


def is_certification_valid(cert: CandidateCertification, now: Optional[datetime] = None) -> bool:
    """Unexpired, regardless of verification."""
    return cert.expiry_date > resolve_now(now)


def is_certification_active(cert: CandidateCertification, now: Optional[datetime] = None) -> bool:
    """Counts toward matching: verified and unexpired."""
    return cert.verified and is_certification_valid(cert, now)


def valid_certifications(candidate: Candidate, now: Optional[datetime] = None) -> List[CandidateCertification]:
    now = resolve_now(now)
    return [c for c in candidate.certifications if is_certification_valid(c, now)]


def expired_certifications(candidate: Candidate, now: Optional[datetime] = None) -> List[CandidateCertification]:
    now = resolve_now(now)
    return [c for c in candidate.certifications if not is_certification_valid(c, now)]


def summarize_certifications(candidate: Candidate, now: Optional[datetime] = None) -> CertificationSummary:
    now = resolve_now(now)
    statuses = [get_certification_status(c, now) for c in candidate.certifications]
    return CertificationSummary(
        active=statuses.count("active"),
        expiring=statuses.count("expiring"),
        expired=statuses.count("expired"),
        valid_certifications=valid_certifications(candidate, now),
        expired_certifications=expired_certifications(candidate, now),
    )
