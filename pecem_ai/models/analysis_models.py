# models/analysis_models.py
from typing import List, Literal

from pecem_ai.models.base_models import Record
from pecem_ai.models.recommendation_models import Priority

SuggestionCategory = Literal["profile", "skills", "experience", "certifications", "courses"]
GapSeverity = Literal["critical", "important", "nice-to-have"]
CareerLevel = Literal["iniciante", "intermediário", "avançado", "especialista"]
ReadinessLevel = Literal["não pronto", "preparação", "pronto", "altamente competitivo"]


class ScoreBreakdown(Record):
    completeness: float = 0
    skills: float = 0
    experience: float = 0
    certifications: float = 0
    engagement: float = 0


class ProfileSuggestion(Record):
    category: SuggestionCategory
    priority: Priority
    title: str
    description: str
    action: str
    impact: int  # 0-100


class KnowledgeGap(Record):
    area: str
    description: str
    severity: GapSeverity
    suggested_courses: List[str] = []
    estimated_time_to_fill: str = ""


class Milestone(Record):
    phase: int
    title: str
    description: str
    duration: str
    objectives: List[str] = []
    courses: List[str] = []


class DevelopmentRoadmap(Record):
    current_level: CareerLevel
    next_level: str
    timeline_months: int
    milestones: List[Milestone] = []
    recommended_actions: List[str] = []


class ReadinessFactors(Record):
    profile_quality: float = 0
    skill_relevance: float = 0
    certification_status: float = 0
    experience_level: float = 0


class MarketReadinessScore(Record):
    score: int = 0
    level: ReadinessLevel = "não pronto"
    factors: ReadinessFactors = ReadinessFactors()
    recommendations: List[str] = []


class ProfileAnalysisResult(Record):
    overall_score: int
    score_breakdown: ScoreBreakdown
    strengths: List[str] = []
    weaknesses: List[str] = []
    suggestions: List[ProfileSuggestion] = []
    knowledge_gaps: List[KnowledgeGap] = []
    development_roadmap: DevelopmentRoadmap
    market_readiness: MarketReadinessScore
