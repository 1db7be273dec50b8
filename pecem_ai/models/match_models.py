# models/match_models.py
from typing import List, Literal

from pecem_ai.models.base_models import Record
from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.job_models import Job

Confidence = Literal["high", "medium", "low"]


class MatchResult(Record):
    score: int = 0
    missing_certifications: List[str] = []
    missing_skills: List[str] = []
    has_expired_certifications: bool = False


class MatchInsights(Record):
    skill_alignment: float = 0
    experience_match: float = 0
    certification_match: float = 0
    location_score: float = 0
    cultural_fit: float = 0


class EnhancedMatchResult(Record):
    score: int = 0
    confidence: Confidence = "low"
    strengths: List[str] = []
    gaps: List[str] = []
    recommendations: List[str] = []
    success_prediction: int = 0
    insights: MatchInsights = MatchInsights()


class JobMatch(Record):
    job: Job
    match: MatchResult


class ApplicantRanking(Record):
    candidate: Candidate
    match: MatchResult
    courses_in_progress: int = 0
    courses_completed: int = 0
    certificates_earned: int = 0
