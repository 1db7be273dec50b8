# pecem_ai/services/score_engine.py
from datetime import datetime
from typing import List, Optional, Sequence

from loguru import logger

from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.course_models import CourseProgress
from pecem_ai.models.job_models import Job
from pecem_ai.models.match_models import ApplicantRanking, JobMatch
from pecem_ai.models.search_models import SearchOptions
from pecem_ai.services.certification_catalog import CertificationCatalog, get_default_catalog
from pecem_ai.services.certification_status import resolve_now
from pecem_ai.services.match_score import calculate_match_score
from pecem_ai.services.semantic_search import search_jobs

DASHBOARD_MIN_SCORE = 50
DASHBOARD_LIMIT = 5
SEARCH_MIN_QUERY_LENGTH = 2
SEARCH_MAX_RESULTS = 100
FULL_MATCH = 100


def is_job_visible_to(candidate: Candidate, job: Job) -> bool:
    if not job.active:
        return False
    if job.restrictions.women_exclusive:
        return candidate.gender == "feminino"
    return True


def _match_jobs(
    candidate: Candidate,
    jobs: Sequence[Job],
    now: datetime,
    catalog: CertificationCatalog,
) -> List[JobMatch]:
    try:
        return [JobMatch(job=job, match=calculate_match_score(candidate, job, now, catalog)) for job in jobs]
    except Exception as e:
        logger.error(f"Match scoring failed for candidate {candidate.id or '?'}: {e}")
        raise


def recommend_jobs(
    candidate: Candidate,
    jobs: Sequence[Job],
    min_score: int = DASHBOARD_MIN_SCORE,
    limit: int = DASHBOARD_LIMIT,
    now: Optional[datetime] = None,
    catalog: Optional[CertificationCatalog] = None,
) -> List[JobMatch]:
    """
    Dashboard shortlist: visible jobs scoring at least min_score, best first.
    Visibility also hides women-exclusive jobs from other candidates, as the
    job search does, not just inactive ones.
    """
    now = resolve_now(now)
    catalog = catalog if catalog is not None else get_default_catalog()

    visible = [job for job in jobs if is_job_visible_to(candidate, job)]
    matches = [m for m in _match_jobs(candidate, visible, now, catalog) if m.match.score >= min_score]
    matches.sort(key=lambda m: m.match.score, reverse=True)

    logger.info(f"🎯 {len(matches)} job(s) >= {min_score} for {candidate.id or '?'} ({len(visible)} visible)")
    return matches[:max(0, limit)]


def search_jobs_for_candidate(
    candidate: Candidate,
    jobs: Sequence[Job],
    query: str = "",
    category: Optional[str] = None,
    only_full_match: bool = False,
    now: Optional[datetime] = None,
    catalog: Optional[CertificationCatalog] = None,
) -> List[JobMatch]:
    """
    Job search page: visible jobs, optionally narrowed by a semantic query
    (kept in relevance order), a category and a full-match-only toggle.
    Without a query the list is ordered by match score.
    """
    now = resolve_now(now)
    catalog = catalog if catalog is not None else get_default_catalog()

    visible = [job for job in jobs if is_job_visible_to(candidate, job)]

    searching = bool(query) and len(query) >= SEARCH_MIN_QUERY_LENGTH
    if searching:
        options = SearchOptions(fuzzy_match=True, synonyms=True, max_results=SEARCH_MAX_RESULTS)
        visible = [result.item for result in search_jobs(query, visible, options)]

    matches = _match_jobs(candidate, visible, now, catalog)
    if category:
        matches = [m for m in matches if m.job.category == category]
    if only_full_match:
        matches = [m for m in matches if m.match.score == FULL_MATCH]
    if not searching:
        matches.sort(key=lambda m: m.match.score, reverse=True)

    logger.debug(f"🔎 Job search '{query}' for {candidate.id or '?'}: {len(matches)} result(s)")
    return matches


def rank_applicants(
    job: Job,
    candidates: Sequence[Candidate],
    progress: Sequence[CourseProgress] = (),
    now: Optional[datetime] = None,
    catalog: Optional[CertificationCatalog] = None,
) -> List[ApplicantRanking]:
    """Applicants for a job with their baseline match and course engagement, best match first."""
    now = resolve_now(now)
    catalog = catalog if catalog is not None else get_default_catalog()

    rankings = []
    for candidate in candidates:
        try:
            match = calculate_match_score(candidate, job, now, catalog)
        except Exception as e:
            logger.error(f"Match scoring failed for applicant {candidate.id or '?'} on job {job.id or '?'}: {e}")
            raise

        own = [p for p in progress if p.user_id == candidate.id]
        rankings.append(ApplicantRanking(
            candidate=candidate,
            match=match,
            courses_in_progress=sum(1 for p in own if p.status in ("in_progress", "enrolled")),
            courses_completed=sum(1 for p in own if p.status == "completed"),
            certificates_earned=sum(1 for p in own if p.status == "completed" and p.certificate_issued),
        ))

    rankings.sort(key=lambda r: r.match.score, reverse=True)
    logger.info(f"📋 Ranked {len(rankings)} applicant(s) for job {job.id or '?'}")
    return rankings
