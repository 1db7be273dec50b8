# pecem_ai/services/assistant.py
import random
from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from pecem_ai.models.assistant_models import (
    AssistantContext,
    AssistantReply,
    AssistantTopic,
    CareerGuidance,
    CoursesOverview,
    JobsOverview,
    ProfileSummary,
    ProgressSummary,
)
from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.course_models import CourseProgress
from pecem_ai.models.job_models import Application
from pecem_ai.services.certification_status import resolve_now, summarize_certifications
from pecem_ai.services.course_recommendation import get_personalized_roadmap, get_recommendations
from pecem_ai.services.score_utils import round_score
from pecem_ai.services.smart_matching import calculate_enhanced_match

# Checked in order, first hit wins
TOPIC_KEYWORDS = {
    "courses": ["curso", "cursos", "aprender", "estudar", "capacitação", "treinamento", "aula"],
    "profile": ["perfil", "meu perfil", "como estou", "minha conta", "meus dados"],
    "career": ["carreira", "crescer", "desenvolvimento", "orientação", "futuro", "plano"],
    "jobs": ["vaga", "vagas", "emprego", "trabalho", "oportunidade"],
    "certifications": ["certificado", "certificação", "certificações", "diploma"],
    "progress": ["progresso", "andamento", "como estou indo", "evolução", "status"],
}

GREETINGS = ["oi", "olá", "ola", "bom dia", "boa tarde", "boa noite", "hey", "opa"]

ACTION_TYPES = {
    "courses": "course_recommendation",
    "profile": "profile_analysis",
    "career": "career_guidance",
}

# Every non-terminal status counts as active, not only "pending"
ACTIVE_APPLICATION_STATUSES = ("pending", "viewed", "interview")

CAREER_TIPS = [
    "Mantenha seu perfil sempre atualizado com suas últimas experiências e habilidades.",
    "Certificações validam seu conhecimento - complete cursos para obtê-las!",
    "Networking é fundamental. Participe de eventos e conecte-se com profissionais da área.",
    "A prática leva à perfeição. Aplique o que você aprende nos cursos em projetos reais.",
    "Esteja aberto a aprender continuamente. O mercado está sempre evoluindo.",
]

COURSE_SUGGESTIONS = 3


def classify_message(message: str) -> AssistantTopic:
    text = message.lower()
    for topic, keywords in TOPIC_KEYWORDS.items():
        if any(k in text for k in keywords):
            return topic
    if any(g in text for g in GREETINGS):
        return "greeting"
    return "general"


def summarize_progress(progress: Sequence[CourseProgress]) -> ProgressSummary:
    total = sum(p.progress_percentage for p in progress)
    return ProgressSummary(
        completed=sum(1 for p in progress if p.status == "completed"),
        in_progress=sum(1 for p in progress if p.status in ("in_progress", "enrolled")),
        average_progress=round_score(total / max(len(progress), 1)),
        certificates_issued=sum(1 for p in progress if p.certificate_issued),
    )


def summarize_profile(candidate: Candidate, progress: Sequence[CourseProgress]) -> ProfileSummary:
    score = candidate.profile_completeness
    if score >= 90:
        feedback = "excellent"
    elif score >= 70:
        feedback = "good"
    else:
        feedback = "needs_attention"

    recommendations = []
    if len(candidate.skills) < 5:
        recommendations.append("Adicione mais habilidades ao seu perfil (mínimo recomendado: 5)")
    if not candidate.certifications:
        recommendations.append("Obtenha certificações para se destacar no mercado")
    if len(candidate.experience) < 2:
        recommendations.append("Adicione mais experiências profissionais ao seu perfil")
    if score < 80:
        recommendations.append("Complete todas as seções do seu perfil para alcançar 80%+")

    summary = summarize_progress(progress)
    return ProfileSummary(
        profile_score=score,
        feedback=feedback,
        skills=len(candidate.skills),
        certifications=len(candidate.certifications),
        experiences=len(candidate.experience),
        completed_courses=summary.completed,
        courses_in_progress=summary.in_progress,
        recommendations=recommendations,
    )


def pick_career_tip(candidate: Candidate, rng: Optional[random.Random] = None) -> str:
    """Targeted tip for the most pressing profile issue, else a random general one."""
    if not candidate.certifications:
        return "Obtenha certificações! Elas são diferenciais importantes no mercado de trabalho."
    if candidate.profile_completeness < 70:
        return "Complete seu perfil! Perfis completos têm até 3x mais chances de serem vistos por recrutadores."
    if len(candidate.skills) < 5:
        return "Adicione mais habilidades ao seu perfil para aumentar suas chances em processos seletivos."
    return (rng or random.Random()).choice(CAREER_TIPS)


def count_active_applications(applications: Sequence[Application]) -> int:
    return sum(1 for a in applications if a.status in ACTIVE_APPLICATION_STATUSES)


def _jobs_overview(context: AssistantContext, now: datetime) -> JobsOverview:
    overview = JobsOverview(active_applications=count_active_applications(context.applications))
    if not context.jobs:
        return overview
    top_job = context.jobs[0]
    return overview.model_copy(update={
        "top_job": top_job,
        "match": calculate_enhanced_match(context.candidate, top_job, now),
    })


def respond(
    message: str,
    context: AssistantContext,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> AssistantReply:
    """
    Route a chat message to the analysis it asks about and return the
    structured result for the reply template. No text is generated here
    apart from the career tip that accompanies the career roadmap.
    Greeting and general replies carry no data.
    """
    now = resolve_now(now)
    topic = classify_message(message)
    candidate = context.candidate

    if topic == "courses":
        data = CoursesOverview(
            in_progress=summarize_progress(context.course_progress).in_progress,
            recommendations=get_recommendations(
                candidate, context.courses, context.course_progress, COURSE_SUGGESTIONS
            ),
        )
    elif topic == "profile":
        data = summarize_profile(candidate, context.course_progress)
    elif topic == "career":
        data = CareerGuidance(
            roadmap=get_personalized_roadmap(candidate, context.courses, context.course_progress),
            tip=pick_career_tip(candidate, rng),
        )
    elif topic == "jobs":
        data = _jobs_overview(context, now)
    elif topic == "certifications":
        data = summarize_certifications(candidate, now)
    elif topic == "progress":
        data = summarize_progress(context.course_progress)
    else:
        data = None

    logger.info(f"💬 Assistant message from {candidate.id or '?'} routed to '{topic}'")
    return AssistantReply(topic=topic, action_type=ACTION_TYPES.get(topic, "general"), data=data)
