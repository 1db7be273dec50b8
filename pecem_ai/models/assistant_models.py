# models/assistant_models.py
from typing import Any, List, Literal, Optional

from pecem_ai.models.base_models import Record
from pecem_ai.models.candidate_models import Candidate
from pecem_ai.models.course_models import Course, CourseProgress
from pecem_ai.models.job_models import Application, Job
from pecem_ai.models.match_models import EnhancedMatchResult
from pecem_ai.models.recommendation_models import PersonalizedRoadmap, RecommendationScore

AssistantTopic = Literal[
    "courses", "profile", "career", "jobs", "certifications", "progress", "greeting", "general"
]
ActionType = Literal[
    "course_recommendation", "profile_analysis", "career_guidance", "navigation", "general"
]


class AssistantContext(Record):
    candidate: Candidate
    courses: List[Course] = []
    course_progress: List[CourseProgress] = []
    jobs: List[Job] = []
    applications: List[Application] = []


class ProgressSummary(Record):
    completed: int = 0
    in_progress: int = 0
    average_progress: int = 0
    certificates_issued: int = 0


class ProfileSummary(Record):
    profile_score: float = 0
    feedback: Literal["excellent", "good", "needs_attention"] = "needs_attention"
    skills: int = 0
    certifications: int = 0
    experiences: int = 0
    completed_courses: int = 0
    courses_in_progress: int = 0
    recommendations: List[str] = []


class AssistantReply(Record):
    """Structured payload handed to the chat template layer."""
    topic: AssistantTopic
    action_type: ActionType = "general"
    data: Optional[Any] = None


class CoursesOverview(Record):
    in_progress: int = 0
    recommendations: List[RecommendationScore] = []


class JobsOverview(Record):
    active_applications: int = 0
    top_job: Optional[Job] = None
    match: Optional[EnhancedMatchResult] = None


class CareerGuidance(Record):
    roadmap: PersonalizedRoadmap
    tip: str
