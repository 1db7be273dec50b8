# models/recommendation_models.py
from typing import List, Literal

from pecem_ai.models.base_models import Record
from pecem_ai.models.course_models import Course

Priority = Literal["high", "medium", "low"]


class RecommendationScore(Record):
    course: Course
    score: float = 0
    reasons: List[str] = []
    priority: Priority = "low"


class PersonalizedRoadmap(Record):
    immediate: List[RecommendationScore] = []
    short_term: List[RecommendationScore] = []
    long_term: List[RecommendationScore] = []
