# models/job_models.py
from typing import List, Literal, Optional

from pecem_ai.models.base_models import Record, UtcDatetime


class JobRestrictions(Record):
    pcd_exclusive: bool = False
    women_exclusive: bool = False
    no_color_blindness: bool = False
    min_experience: int = 0


class Salary(Record):
    min: float = 0
    max: float = 0


class Job(Record):
    id: str = ""
    company_id: str = ""
    title: str = ""
    description: str = ""
    category: str = ""
    location: str = ""
    required_certifications: List[str] = []
    required_skills: List[str] = []
    desired_skills: List[str] = []
    restrictions: JobRestrictions = JobRestrictions()
    salary: Salary = Salary()
    regime: Optional[Literal["CLT", "PJ", "Temp"]] = None
    benefits: List[str] = []
    active: bool = True
    published_at: Optional[UtcDatetime] = None


class Application(Record):
    id: str = ""
    job_id: str
    candidate_id: str
    match_score: float = 0
    status: Literal["pending", "viewed", "interview", "rejected", "hired"] = "pending"
    applied_at: Optional[UtcDatetime] = None
