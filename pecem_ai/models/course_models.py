# models/course_models.py
from typing import Dict, List, Literal, Optional

from pecem_ai.models.base_models import Record, UtcDatetime

CourseLevel = Literal["basico", "intermediario", "avancado"]
CourseMode = Literal["ead", "presencial", "hibrido"]
ProgressStatus = Literal["enrolled", "in_progress", "completed", "dropped"]


class Course(Record):
    id: str
    title: str = ""
    description: str = ""
    category: str = ""
    duration: float = 0  # hours
    mode: CourseMode = "ead"
    level: CourseLevel = "basico"
    instructor: str = ""
    location: Optional[str] = None
    schedule: Optional[str] = None
    max_students: Optional[int] = None
    tags: List[str] = []
    active: bool = True
    published_at: Optional[UtcDatetime] = None


class CourseProgress(Record):
    id: str = ""
    user_id: str = ""
    course_id: str
    enrolled_at: Optional[UtcDatetime] = None
    started_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    last_accessed_at: Optional[UtcDatetime] = None
    completed_lessons: List[str] = []
    progress_percentage: float = 0
    quiz_scores: Dict[str, float] = {}
    status: ProgressStatus = "enrolled"
    certificate_issued: bool = False
