# pecem_ai/services/profile_analysis.py
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from loguru import logger

from pecem_ai.models.analysis_models import (
    CareerLevel,
    DevelopmentRoadmap,
    KnowledgeGap,
    MarketReadinessScore,
    Milestone,
    ProfileAnalysisResult,
    ProfileSuggestion,
    ReadinessFactors,
    ScoreBreakdown,
)
from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.course_models import Course, CourseProgress
from pecem_ai.models.job_models import Job
from pecem_ai.services.certification_status import (
    expired_certifications,
    resolve_now,
    valid_certifications,
)
from pecem_ai.services.score_utils import round_score
from pecem_ai.services.skill_normalizer import skills_overlap

OVERALL_WEIGHTS = {
    "completeness": 0.25,
    "skills": 0.20,
    "experience": 0.20,
    "certifications": 0.25,
    "engagement": 0.10,
}

READINESS_WEIGHTS = {
    "profile_quality": 0.25,
    "skill_relevance": 0.30,
    "certification_status": 0.25,
    "experience_level": 0.20,
}

# Skill relevance when no market jobs are available
DEFAULT_SKILL_RELEVANCE = 70

MAX_MARKET_SKILLS = 10
MAX_KNOWLEDGE_GAPS = 5
MAX_SUGGESTED_COURSES = 3

NEXT_LEVEL = {
    "iniciante": "intermediário",
    "intermediário": "avançado",
    "avançado": "especialista",
    "especialista": "líder/mentor",
}

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


def _completed_count(progress: Sequence[CourseProgress]) -> int:
    return sum(1 for p in progress if p.status == "completed")


def _in_progress_count(progress: Sequence[CourseProgress]) -> int:
    return sum(1 for p in progress if p.status in ("in_progress", "enrolled"))


def _capped_ratio(count: float, target: float) -> float:
    return min(100, count / target * 100)


# -----------------------------
# Scores
# -----------------------------
def calculate_score_breakdown(
    candidate: Candidate, progress: Sequence[CourseProgress], now: Optional[datetime] = None
) -> ScoreBreakdown:
    return ScoreBreakdown(
        completeness=candidate.profile_completeness,
        skills=_capped_ratio(len(candidate.skills), 10),
        experience=_capped_ratio(len(candidate.experience), 5),
        certifications=_capped_ratio(len(valid_certifications(candidate, now)), 3),
        engagement=min(100, _completed_count(progress) * 20 + _in_progress_count(progress) * 10),
    )


def calculate_overall_score(breakdown: ScoreBreakdown) -> int:
    return round_score(sum(getattr(breakdown, name) * w for name, w in OVERALL_WEIGHTS.items()))


# -----------------------------
# Strengths / weaknesses / suggestions
# -----------------------------
def identify_strengths(
    candidate: Candidate, progress: Sequence[CourseProgress], now: Optional[datetime] = None
) -> List[str]:
    strengths = []
    if candidate.profile_completeness >= 90:
        strengths.append("Perfil muito completo e bem estruturado")
    if len(candidate.skills) >= 8:
        strengths.append(f"Conjunto amplo de habilidades ({len(candidate.skills)} skills)")

    valid = len(valid_certifications(candidate, now))
    if valid >= 3:
        strengths.append(f"Bem certificado ({valid} certificações válidas)")
    if len(candidate.experience) >= 3:
        strengths.append(f"Experiência sólida ({len(candidate.experience)} posições)")

    completed = _completed_count(progress)
    if completed >= 5:
        strengths.append(f"Alto engajamento em capacitação ({completed} cursos concluídos)")
    if _in_progress_count(progress) >= 2:
        strengths.append("Ativamente em desenvolvimento contínuo")
    if candidate.is_pcd:
        strengths.append("Elegível para vagas exclusivas PCD")
    return strengths


def identify_weaknesses(
    candidate: Candidate, progress: Sequence[CourseProgress], now: Optional[datetime] = None
) -> List[str]:
    weaknesses = []
    if candidate.profile_completeness < 70:
        weaknesses.append("Perfil incompleto - faltam informações importantes")
    if len(candidate.skills) < 5:
        weaknesses.append("Poucas habilidades cadastradas no perfil")
    if not candidate.certifications:
        weaknesses.append("Sem certificações profissionais")

    expired = len(expired_certifications(candidate, now))
    if expired > 0:
        weaknesses.append(f"{expired} certificação(ões) expirada(s)")
    if len(candidate.experience) < 2:
        weaknesses.append("Pouca experiência profissional registrada")
    if _completed_count(progress) == 0:
        weaknesses.append("Nenhum curso concluído ainda")
    if _in_progress_count(progress) == 0:
        weaknesses.append("Sem cursos em andamento no momento")
    return weaknesses


def generate_suggestions(candidate: Candidate, progress: Sequence[CourseProgress]) -> List[ProfileSuggestion]:
    suggestions = []

    completeness = candidate.profile_completeness
    if completeness < 100:
        suggestions.append(ProfileSuggestion(
            category="profile",
            priority="high" if completeness < 70 else "medium",
            title="Complete seu perfil",
            description=f"Seu perfil está {completeness:g}% completo. Perfis completos têm 3x mais visibilidade.",
            action='Acesse "Meu Perfil" e preencha todas as seções',
            impact=85,
        ))

    if len(candidate.skills) < 8:
        suggestions.append(ProfileSuggestion(
            category="skills",
            priority="high" if len(candidate.skills) < 5 else "medium",
            title="Adicione mais habilidades",
            description="Candidatos com 8+ habilidades têm 40% mais chances de match.",
            action="Liste todas as suas competências técnicas e comportamentais",
            impact=70,
        ))

    if not candidate.certifications:
        suggestions.append(ProfileSuggestion(
            category="certifications",
            priority="high",
            title="Obtenha certificações",
            description="Certificações validam suas habilidades e aumentam credibilidade.",
            action="Complete cursos na plataforma para obter certificações",
            impact=90,
        ))

    if len(candidate.experience) < 3:
        suggestions.append(ProfileSuggestion(
            category="experience",
            priority="medium",
            title="Detalhe suas experiências",
            description="Adicione todas as suas experiências profissionais relevantes.",
            action="Inclua projetos, estágios e trabalhos anteriores",
            impact=75,
        ))

    completed = _completed_count(progress)
    if completed < 3:
        suggestions.append(ProfileSuggestion(
            category="courses",
            priority="high" if completed == 0 else "medium",
            title="Complete mais cursos",
            description="Cada curso concluído aumenta suas qualificações.",
            action="Matricule-se em cursos relacionados à sua área",
            impact=80,
        ))

    return sorted(suggestions, key=lambda s: (PRIORITY_ORDER[s.priority], s.impact), reverse=True)


# -----------------------------
# Knowledge gaps
# -----------------------------
def estimate_time_to_fill(courses_needed: int) -> str:
    if courses_needed <= 1:
        return "2-4 semanas"
    if courses_needed <= 2:
        return "1-2 meses"
    return "2-3 meses"


def _gap_severity(demand: int) -> str:
    if demand > 5:
        return "critical"
    if demand > 2:
        return "important"
    return "nice-to-have"


def market_skill_demand(jobs: Sequence[Job]) -> Dict[str, int]:
    """Lowercased required+desired skill -> number of occurrences across jobs (first-seen order)."""
    demand: Counter = Counter()
    for job in jobs:
        for skill in [*job.required_skills, *job.desired_skills]:
            demand[skill.lower()] += 1
    return dict(demand)


def identify_knowledge_gaps(
    candidate: Candidate, courses: Sequence[Course], market_jobs: Sequence[Job]
) -> List[KnowledgeGap]:
    """
    Top market skills the candidate lacks, each backed by up to 3 courses whose
    title or tags mention it, plus a certification gap for uncertified
    candidates. At most 5 gaps.
    """
    gaps = []
    demand = market_skill_demand(market_jobs)
    top_skills = sorted(demand.items(), key=lambda kv: kv[1], reverse=True)[:MAX_MARKET_SKILLS]

    for skill, count in top_skills:
        if any(skills_overlap(cs, skill) for cs in candidate.skills):
            continue

        related = [
            c.title for c in courses
            if skill in c.title.lower() or any(skill in tag.lower() for tag in c.tags)
        ][:MAX_SUGGESTED_COURSES]
        if not related:
            logger.debug(f"No course covers market skill '{skill}'")
            continue

        gaps.append(KnowledgeGap(
            area=skill,
            description=f"Habilidade muito demandada no mercado ({count} vagas)",
            severity=_gap_severity(count),
            suggested_courses=related,
            estimated_time_to_fill=estimate_time_to_fill(len(related)),
        ))

    if not candidate.certifications:
        gaps.append(KnowledgeGap(
            area="Certificações Profissionais",
            description="Sem certificações que validem suas competências",
            severity="important",
            suggested_courses=[c.title for c in courses if c.category == candidate.main_area][:MAX_SUGGESTED_COURSES],
            estimated_time_to_fill="1-2 meses",
        ))

    return gaps[:MAX_KNOWLEDGE_GAPS]


# -----------------------------
# Development roadmap
# -----------------------------
def assess_current_level(
    candidate: Candidate, progress: Sequence[CourseProgress], now: Optional[datetime] = None
) -> CareerLevel:
    points = (
        _completed_count(progress) * 10
        + len(valid_certifications(candidate, now)) * 15
        + len(candidate.experience) * 10
    )
    if points >= 80:
        return "especialista"
    if points >= 50:
        return "avançado"
    if points >= 25:
        return "intermediário"
    return "iniciante"


def _courses_for(gaps: Sequence[KnowledgeGap], severity: str) -> List[str]:
    titles = [title for g in gaps if g.severity == severity for title in g.suggested_courses]
    return titles[:MAX_SUGGESTED_COURSES]


def get_recommended_actions(level: str, gaps: Sequence[KnowledgeGap]) -> List[str]:
    actions = []
    if level == "iniciante":
        actions.append("Foque em completar seu perfil e obter certificações básicas")
        actions.append("Matricule-se em cursos fundamentais da sua área")
    if any(g.severity == "critical" for g in gaps):
        actions.append("Priorize cursos que preencham gaps críticos identificados")
    actions.append("Mantenha-se ativo: complete pelo menos 1 curso por mês")
    actions.append("Aplique o conhecimento em projetos práticos")
    actions.append("Atualize regularmente suas habilidades e experiências")
    return actions


def create_development_roadmap(
    candidate: Candidate,
    progress: Sequence[CourseProgress],
    gaps: Sequence[KnowledgeGap],
    now: Optional[datetime] = None,
) -> DevelopmentRoadmap:
    """
    Beginners get a foundations phase first; everyone gets a development
    phase; non-beginners also get a specialization phase. Each phase pulls
    courses from the knowledge gaps of one severity.
    """
    level = assess_current_level(candidate, progress, now)
    milestones = []

    if level == "iniciante":
        milestones.append(Milestone(
            phase=1,
            title="Construir Fundamentos Sólidos",
            description="Estabelecer base de conhecimento e completar perfil",
            duration="0-2 meses",
            objectives=[
                "Completar perfil para 90%+",
                "Adicionar pelo menos 8 habilidades",
                "Concluir 2-3 cursos básicos",
                "Obter primeira certificação",
            ],
            courses=_courses_for(gaps, "critical"),
        ))

    milestones.append(Milestone(
        phase=len(milestones) + 1,
        title="Desenvolver Competências Avançadas",
        description="Aprofundar conhecimento e ganhar experiência prática",
        duration="2-4 meses",
        objectives=[
            "Concluir 3-5 cursos intermediários",
            "Obter 2-3 certificações relevantes",
            "Aplicar conhecimento em projetos práticos",
            "Expandir network profissional",
        ],
        courses=_courses_for(gaps, "important"),
    ))

    if level != "iniciante":
        milestones.append(Milestone(
            phase=len(milestones) + 1,
            title="Especializar e Destacar-se",
            description="Tornar-se referência na sua área",
            duration="4-6 meses",
            objectives=[
                "Concluir cursos avançados",
                "Obter certificações de especialista",
                "Contribuir com a comunidade",
                "Buscar posições de liderança",
            ],
            courses=_courses_for(gaps, "nice-to-have"),
        ))

    return DevelopmentRoadmap(
        current_level=level,
        next_level=NEXT_LEVEL.get(level, "próximo nível"),
        timeline_months=len(milestones) * 2,
        milestones=milestones,
        recommended_actions=get_recommended_actions(level, gaps),
    )


# -----------------------------
# Market readiness
# -----------------------------
def calculate_skill_relevance(candidate: Candidate, market_jobs: Sequence[Job]) -> float:
    """Share of the candidate's skills that some market job asks for."""
    if not market_jobs:
        return DEFAULT_SKILL_RELEVANCE

    market_skills = set(market_skill_demand(market_jobs))
    matching = [cs for cs in candidate.skills if any(skills_overlap(cs, ms) for ms in market_skills)]
    return min(100, len(matching) / max(len(candidate.skills), 1) * 100)


def _readiness_recommendations(score: int, factors: ReadinessFactors) -> List[str]:
    recommendations = []
    if factors.profile_quality < 80:
        recommendations.append("Complete seu perfil para aumentar sua visibilidade")
    if factors.skill_relevance < 70:
        recommendations.append("Adicione habilidades mais demandadas pelo mercado")
    if factors.certification_status < 60:
        recommendations.append("Obtenha certificações para validar suas competências")
    if factors.experience_level < 60:
        recommendations.append("Ganhe mais experiência através de projetos e estágios")

    if score >= 80:
        recommendations.append("Você está pronto! Candidate-se às melhores oportunidades")
    elif score >= 60:
        recommendations.append("Continue se desenvolvendo para se destacar ainda mais")
    else:
        recommendations.append("Foque em desenvolvimento contínuo antes de se candidatar")
    return recommendations


def assess_market_readiness(
    candidate: Candidate, market_jobs: Sequence[Job], now: Optional[datetime] = None
) -> MarketReadinessScore:
    factors = ReadinessFactors(
        profile_quality=candidate.profile_completeness,
        skill_relevance=calculate_skill_relevance(candidate, market_jobs),
        certification_status=_capped_ratio(len(valid_certifications(candidate, now)), 3),
        experience_level=_capped_ratio(len(candidate.experience), 5),
    )
    score = round_score(sum(getattr(factors, name) * w for name, w in READINESS_WEIGHTS.items()))

    if score >= 80:
        level = "altamente competitivo"
    elif score >= 60:
        level = "pronto"
    elif score >= 40:
        level = "preparação"
    else:
        level = "não pronto"

    return MarketReadinessScore(
        score=score,
        level=level,
        factors=factors,
        recommendations=_readiness_recommendations(score, factors),
    )


# -----------------------------
# Main analysis
# -----------------------------
def analyze_profile(
    candidate: Candidate,
    courses: Sequence[Course],
    progress: Sequence[CourseProgress],
    market_jobs: Sequence[Job] = (),
    now: Optional[datetime] = None,
) -> ProfileAnalysisResult:
    """Full analysis bundle consumed by the profile page and the assistant."""
    now = resolve_now(now)

    breakdown = calculate_score_breakdown(candidate, progress, now)
    gaps = identify_knowledge_gaps(candidate, courses, market_jobs)
    result = ProfileAnalysisResult(
        overall_score=calculate_overall_score(breakdown),
        score_breakdown=breakdown,
        strengths=identify_strengths(candidate, progress, now),
        weaknesses=identify_weaknesses(candidate, progress, now),
        suggestions=generate_suggestions(candidate, progress),
        knowledge_gaps=gaps,
        development_roadmap=create_development_roadmap(candidate, progress, gaps, now),
        market_readiness=assess_market_readiness(candidate, market_jobs, now),
    )
    logger.info(
        f"👤 Profile {candidate.id or '?'} analysed: overall={result.overall_score}, "
        f"gaps={len(gaps)}, readiness={result.market_readiness.score}"
    )
    return result
