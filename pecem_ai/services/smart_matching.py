# pecem_ai/services/smart_matching.py
from datetime import datetime
from typing import List, Optional, Tuple

from loguru import logger

from pecem_ai import config
from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.job_models import Job
from pecem_ai.models.match_models import EnhancedMatchResult, MatchInsights
from pecem_ai.services.certification_status import is_certification_valid, resolve_now
from pecem_ai.services.score_utils import priority_for, ratio, round_score
from pecem_ai.services.skill_normalizer import get_semantic_matches, skills_overlap

# Weights sum to 1.0
INSIGHT_WEIGHTS = {
    "skill_alignment": 0.25,
    "experience_match": 0.20,
    "certification_match": 0.30,
    "location_score": 0.15,
    "cultural_fit": 0.10,
}

SUCCESS_WEIGHTS = {
    "skills": 0.30,
    "certs": 0.25,
    "experience": 0.20,
    "profile": 0.15,
    "location": 0.10,
}

REQUIRED_SKILLS_SHARE = 70
DESIRED_SKILLS_SHARE = 30
SEMANTIC_PARTIAL_CREDIT = 0.5


# -----------------------------
# Insights
# -----------------------------
def analyze_skill_alignment(candidate: Candidate, job: Job) -> int:
    """
    Required skills earn full credit on a substring match and half credit when
    the candidate only holds a related skill (SKILL_SEMANTIC_MAP). Desired
    skills only count on a substring match.
    """
    candidate_skills = [s.lower() for s in candidate.skills]

    matched_required = 0.0
    for required in job.required_skills:
        required_lower = required.lower()
        if any(skills_overlap(cs, required_lower) for cs in candidate_skills):
            matched_required += 1
            continue
        related = get_semantic_matches(required_lower)
        if any(skills_overlap(cs, term) for cs in candidate_skills for term in related):
            matched_required += SEMANTIC_PARTIAL_CREDIT

    matched_desired = sum(
        1 for desired in job.desired_skills
        if any(skills_overlap(cs, desired) for cs in candidate_skills)
    )

    required_score = (
        matched_required / len(job.required_skills) * REQUIRED_SKILLS_SHARE
        if job.required_skills else REQUIRED_SKILLS_SHARE
    )
    desired_score = (
        matched_desired / len(job.desired_skills) * DESIRED_SKILLS_SHARE
        if job.desired_skills else DESIRED_SKILLS_SHARE
    )
    return min(100, round_score(required_score + desired_score))


def analyze_experience_match(candidate: Candidate, job: Job) -> int:
    # Each experience entry counts as one year
    years = len(candidate.experience)
    if years >= job.restrictions.min_experience:
        return 100
    return min(100, round_score(ratio(years, job.restrictions.min_experience) * 100))


def analyze_certification_match(candidate: Candidate, job: Job, now: Optional[datetime] = None) -> int:
    # Only expiry is checked here; the baseline scorer also requires verification
    if not job.required_certifications:
        return 100

    now = resolve_now(now)
    valid_ids = {
        c.certification_id.lower() for c in candidate.certifications if is_certification_valid(c, now)
    }
    matched = sum(1 for req in job.required_certifications if req.lower() in valid_ids)
    return round_score(matched / len(job.required_certifications) * 100)


def analyze_location_compatibility(candidate: Candidate, job: Job) -> int:
    candidate_location = f"{candidate.location.city}, {candidate.location.state}".lower()
    job_location = job.location.lower()

    if candidate_location in job_location or job_location in candidate_location:
        return 100

    reference = config.REFERENCE_STATE
    if candidate.location.state == reference and reference.lower() in job_location:
        return 70

    return 40


def analyze_cultural_fit(candidate: Candidate, job: Job) -> int:
    score = 50

    area = candidate.main_area.lower()
    category = job.category.lower()
    if area in category or category in area:
        score += 30

    if candidate.is_pcd and job.restrictions.pcd_exclusive:
        score += 20

    return min(100, score)


# -----------------------------
# Explanations
# -----------------------------
def identify_strengths(candidate: Candidate, insights: MatchInsights) -> List[str]:
    strengths = []
    if insights.certification_match >= 80:
        strengths.append("Todas as certificações necessárias em dia")
    if insights.skill_alignment >= 80:
        strengths.append("Forte alinhamento de habilidades")
    if insights.experience_match == 100:
        strengths.append("Experiência acima do requisito mínimo")
    if insights.location_score == 100:
        strengths.append("Localização ideal")
    if candidate.profile_completeness >= 90:
        strengths.append("Perfil muito completo")
    return strengths


def identify_gaps(candidate: Candidate, insights: MatchInsights) -> List[Tuple[str, Optional[str]]]:
    """Returns (gap, recommendation) pairs. A gap may have no recommendation."""
    gaps = []
    if insights.certification_match < 100:
        gaps.append((
            "Faltam algumas certificações obrigatórias",
            "Complete os cursos de certificação necessários na plataforma",
        ))
    if insights.skill_alignment < 70:
        gaps.append((
            "Algumas habilidades importantes estão faltando",
            "Adicione mais habilidades relevantes ao seu perfil",
        ))
    # No recommendation: the lookup is a case-sensitive "experiência" check,
    # which never matches this capitalized gap text
    if insights.experience_match < 100:
        gaps.append(("Experiência abaixo do requisito mínimo", None))
    if candidate.profile_completeness < 70:
        gaps.append((
            "Perfil incompleto - adicione mais informações",
            "Complete todas as seções do seu perfil para melhorar o match",
        ))
    return gaps


def predict_success_rate(insights: MatchInsights, candidate: Candidate) -> int:
    prediction = round_score(
        insights.skill_alignment * SUCCESS_WEIGHTS["skills"]
        + insights.certification_match * SUCCESS_WEIGHTS["certs"]
        + insights.experience_match * SUCCESS_WEIGHTS["experience"]
        + candidate.profile_completeness * SUCCESS_WEIGHTS["profile"]
        + insights.location_score * SUCCESS_WEIGHTS["location"]
    )
    return min(100, prediction)


# -----------------------------
# Main scoring function
# -----------------------------
def calculate_enhanced_match(
    candidate: Candidate, job: Job, now: Optional[datetime] = None
) -> EnhancedMatchResult:
    """
    Five weighted insights (skills 25%, experience 20%, certifications 30%,
    location 15%, cultural fit 10%) plus strengths, gaps, recommendations,
    a success prediction and a confidence tier (high >= 80, medium >= 60).
    """
    insights = MatchInsights(
        skill_alignment=analyze_skill_alignment(candidate, job),
        experience_match=analyze_experience_match(candidate, job),
        certification_match=analyze_certification_match(candidate, job, now),
        location_score=analyze_location_compatibility(candidate, job),
        cultural_fit=analyze_cultural_fit(candidate, job),
    )

    score = round_score(sum(getattr(insights, name) * w for name, w in INSIGHT_WEIGHTS.items()))

    gaps = identify_gaps(candidate, insights)
    recommendations = [rec for _, rec in gaps if rec] or ["Seu perfil está ótimo! Candidate-se com confiança"]

    logger.debug(f"🔍 Enhanced match {candidate.id or '?'} x {job.id or '?'}: {score} ({insights})")

    return EnhancedMatchResult(
        score=score,
        confidence=priority_for(score, high=80, medium=60),
        strengths=identify_strengths(candidate, insights),
        gaps=[gap for gap, _ in gaps],
        recommendations=recommendations,
        success_prediction=predict_success_rate(insights, candidate),
        insights=insights,
    )
