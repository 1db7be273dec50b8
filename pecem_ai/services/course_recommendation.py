# pecem_ai/services/course_recommendation.py
from typing import List, NamedTuple, Sequence

from loguru import logger

from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.course_models import Course, CourseProgress
from pecem_ai.models.recommendation_models import PersonalizedRoadmap, RecommendationScore
from pecem_ai.services.score_utils import priority_for
from pecem_ai.services.skill_normalizer import get_area_keywords

DEFAULT_LIMIT = 6
ROADMAP_POOL = 12
ROADMAP_CAPS = {"high": 3, "medium": 4, "low": 5}


class SubScore(NamedTuple):
    score: int
    reason: str = ""


NO_MATCH = SubScore(0)


# -----------------------------
# Sub-analyses (additive)
# -----------------------------
def analyze_main_area_match(main_area: str, course: Course) -> SubScore:
    keywords = get_area_keywords(main_area)
    course_text = f"{course.title} {course.description} {' '.join(course.tags)}".lower()
    match_count = sum(1 for keyword in keywords if keyword.lower() in course_text)
    if match_count > 0:
        return SubScore(min(30, match_count * 10), f"Alinhado com sua área: {main_area}")
    return NO_MATCH


def analyze_certification_gap(candidate: Candidate, course: Course) -> SubScore:
    cert_tags = [
        tag.lower() for tag in course.tags
        if "NR-" in tag.upper() or "certificação" in tag.lower()
    ]
    if not cert_tags:
        return NO_MATCH

    held = [c.certification_id.lower() for c in candidate.certifications]
    has_gap = any(not any(tag in cert for cert in held) for tag in cert_tags)
    if has_gap:
        return SubScore(25, "Certificação que você ainda não possui")
    return NO_MATCH


def analyze_skills_alignment(skills: Sequence[str], course: Course) -> SubScore:
    description = course.description.lower()
    matching = [skill for skill in skills if skill and skill.lower() in description]
    if matching:
        return SubScore(min(20, len(matching) * 7), f"Complementa suas habilidades em {matching[0]}")
    return NO_MATCH


def analyze_profile_completeness(candidate: Candidate, course: Course) -> SubScore:
    if candidate.profile_completeness < 70 and course.level == "basico":
        return SubScore(15, "Curso básico ideal para começar")
    if candidate.profile_completeness >= 80 and course.level == "avancado":
        return SubScore(15, "Nível avançado adequado ao seu perfil")
    # Every course keeps a small base contribution
    return SubScore(5)


def analyze_career_progression(course: Course, progress: Sequence[CourseProgress]) -> SubScore:
    completed = sum(1 for p in progress if p.status == "completed")

    # Two independent rules; when both apply the later one replaces the
    # earlier result instead of adding to it.
    result = NO_MATCH
    if completed > 0 and course.level == "intermediario":
        result = SubScore(10, "Próximo passo na sua progressão")
    if completed > 2 and course.level == "avancado":
        result = SubScore(10, "Evolução natural dos seus estudos")
    return result


# -----------------------------
# Scoring
# -----------------------------
def calculate_recommendation_score(
    candidate: Candidate, course: Course, progress: Sequence[CourseProgress]
) -> RecommendationScore:
    """
    Additive score over area match (30), certification gap (25), skill
    alignment (20), profile fit (15 or 5) and career progression (10).
    Courses the candidate already has a progress record for score 0.
    The total is not clamped.
    """
    if any(p.course_id == course.id for p in progress):
        return RecommendationScore(course=course, score=0, reasons=["Já matriculado"], priority="low")

    parts = [
        analyze_main_area_match(candidate.main_area, course),
        analyze_certification_gap(candidate, course),
        analyze_skills_alignment(candidate.skills, course),
        analyze_profile_completeness(candidate, course),
        analyze_career_progression(course, progress),
    ]
    score = sum(p.score for p in parts)
    reasons = [p.reason for p in parts if p.reason]

    return RecommendationScore(course=course, score=score, reasons=reasons, priority=priority_for(score))


def get_recommendations(
    candidate: Candidate,
    courses: Sequence[Course],
    progress: Sequence[CourseProgress],
    limit: int = DEFAULT_LIMIT,
) -> List[RecommendationScore]:
    """Scored courses with score > 0, best first (ties keep corpus order), capped at limit."""
    scored = [calculate_recommendation_score(candidate, course, progress) for course in courses]
    ranked = sorted((r for r in scored if r.score > 0), key=lambda r: r.score, reverse=True)
    logger.debug(f"📚 {len(ranked)}/{len(courses)} courses recommendable for {candidate.id or '?'}")
    return ranked[:max(0, limit)]


def get_personalized_roadmap(
    candidate: Candidate,
    courses: Sequence[Course],
    progress: Sequence[CourseProgress],
) -> PersonalizedRoadmap:
    recommendations = get_recommendations(candidate, courses, progress, ROADMAP_POOL)

    def bucket(priority: str) -> List[RecommendationScore]:
        return [r for r in recommendations if r.priority == priority][:ROADMAP_CAPS[priority]]

    return PersonalizedRoadmap(
        immediate=bucket("high"),
        short_term=bucket("medium"),
        long_term=bucket("low"),
    )
