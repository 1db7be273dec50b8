# pecem_ai/services/match_score.py
import math
from datetime import datetime
from typing import List, Optional

from loguru import logger

from pecem_ai import config
from pecem_ai.models.candidate_models import Candidate, Coordinates
from pecem_ai.models.job_models import Job
from pecem_ai.models.match_models import MatchResult
from pecem_ai.services.certification_catalog import CertificationCatalog, get_default_catalog
from pecem_ai.services.certification_status import (
    is_certification_active,
    is_certification_valid,
    resolve_now,
)
from pecem_ai.services.score_utils import round_score
from pecem_ai.services.skill_normalizer import skills_overlap

CERTIFICATION_WEIGHT = 60
SKILLS_WEIGHT = 30
GEO_WEIGHT = 10

EARTH_RADIUS_KM = 6371
NEAR_HUB_KM = 20
REGION_KM = 50


# -----------------------------
# Geography
# -----------------------------
def haversine_km(a: Coordinates, b: Coordinates) -> float:
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def hub_coordinates() -> Coordinates:
    return Coordinates(lat=config.HUB_LATITUDE, lng=config.HUB_LONGITUDE)


def distance_to_hub(candidate: Candidate) -> float:
    return haversine_km(candidate.location.coordinates, hub_coordinates())


def geo_points(distance_km: float) -> int:
    if distance_km < NEAR_HUB_KM:
        return GEO_WEIGHT
    if distance_km < REGION_KM:
        return GEO_WEIGHT // 2
    return 0


# -----------------------------
# Components
# -----------------------------
def _certification_points(
    candidate: Candidate,
    job: Job,
    now: datetime,
    catalog: CertificationCatalog,
    missing_certifications: List[str],
) -> float:
    if not job.required_certifications:
        return CERTIFICATION_WEIGHT

    active_ids = {c.certification_id for c in candidate.certifications if is_certification_active(c, now)}
    matched = 0
    for required in job.required_certifications:
        if required in active_ids:
            matched += 1
            continue
        name = catalog.name_for(required)
        if name:
            missing_certifications.append(name)
        else:
            logger.debug(f"Certification {required} not in catalog, skipping its name")

    return matched / len(job.required_certifications) * CERTIFICATION_WEIGHT


def _skill_points(candidate: Candidate, job: Job, missing_skills: List[str]) -> float:
    if not job.required_skills:
        return SKILLS_WEIGHT

    matched = 0
    for required in job.required_skills:
        if any(skills_overlap(skill, required) for skill in candidate.skills):
            matched += 1
        else:
            missing_skills.append(required)

    return matched / len(job.required_skills) * SKILLS_WEIGHT


# -----------------------------
# Main scoring function
# -----------------------------
def calculate_match_score(
    candidate: Candidate,
    job: Job,
    now: Optional[datetime] = None,
    catalog: Optional[CertificationCatalog] = None,
) -> MatchResult:
    """
    Baseline candidate/job compatibility used by the dashboards.

    Scoring formula:
    - 60 points for required certifications (verified and unexpired), pro rata
    - 30 points for required skills (substring match either way), pro rata
    - 10 points for proximity to the employment hub (<20km full, <50km half)

    Jobs without required certifications/skills award the full component.
    """
    now = resolve_now(now)
    catalog = catalog if catalog is not None else get_default_catalog()

    missing_certifications: List[str] = []
    missing_skills: List[str] = []
    has_expired = any(not is_certification_valid(c, now) for c in candidate.certifications)

    cert_points = _certification_points(candidate, job, now, catalog, missing_certifications)
    skill_points = _skill_points(candidate, job, missing_skills)
    distance = distance_to_hub(candidate)
    location_points = geo_points(distance)

    score = round_score(cert_points + skill_points + location_points)
    logger.debug(
        f"🔍 Match {candidate.id or '?'} x {job.id or '?'}: {score} "
        f"(certs={cert_points:.1f}, skills={skill_points:.1f}, geo={location_points}, {distance:.1f}km)"
    )

    return MatchResult(
        score=score,
        missing_certifications=missing_certifications,
        missing_skills=missing_skills,
        has_expired_certifications=has_expired,
    )
