"""
Shared builders for the scoring tests. Every expiry-dependent test pins the
clock to NOW.
"""
from datetime import datetime, timedelta, timezone

import pytest

from pecem_ai.models.candidate_models import Candidate, CandidateCertification
from pecem_ai.models.course_models import Course, CourseProgress
from pecem_ai.models.job_models import Job
from pecem_ai.services.certification_catalog import CertificationCatalog

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

# Employment hub (config defaults) and a point ~15km north of it
HUB = {"lat": -3.6, "lng": -38.97}
NEAR_HUB = {"lat": -3.465, "lng": -38.97}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def catalog():
    """Small in-memory catalog"""
    return CertificationCatalog.from_records([
        {"id": "NR-10", "name": "NR-10 Segurança em Instalações Elétricas", "category": "safety",
         "validityPeriod": 24, "issuingBody": "MTE"},
        {"id": "NR-35", "name": "NR-35 Trabalho em Altura", "category": "safety",
         "validityPeriod": 24, "issuingBody": "MTE"},
    ])


@pytest.fixture
def make_cert():
    def _make(cert_id="NR-10", days_left=365, verified=True):
        return CandidateCertification(
            certification_id=cert_id,
            issue_date=NOW - timedelta(days=365),
            expiry_date=NOW + timedelta(days=days_left),
            verified=verified,
        )
    return _make


@pytest.fixture
def make_candidate():
    def _make(**overrides):
        data = {
            "id": "cand-1",
            "name": "Maria Souza",
            "email": "maria@example.com",
            "location": {"city": "São Gonçalo do Amarante", "state": "CE", "coordinates": HUB},
            "isPCD": False,
            "gender": "feminino",
            "mainArea": "Operação de Equipamentos",
            "profileCompleteness": 80,
            "certifications": [],
            "experience": [],
            "skills": [],
        }
        data.update(overrides)
        return Candidate.model_validate(data)
    return _make


@pytest.fixture
def make_job():
    def _make(**overrides):
        data = {
            "id": "job-1",
            "companyId": "comp-1",
            "title": "Operador de Empilhadeira",
            "description": "Operação de empilhadeira no terminal portuário",
            "category": "Operação de Equipamentos",
            "location": "São Gonçalo do Amarante, CE",
            "requiredCertifications": [],
            "requiredSkills": [],
            "desiredSkills": [],
        }
        data.update(overrides)
        return Job.model_validate(data)
    return _make


@pytest.fixture
def make_course():
    def _make(**overrides):
        data = {
            "id": "course-1",
            "title": "Curso Genérico",
            "description": "",
            "category": "Geral",
            "level": "intermediario",
            "instructor": "Ana Lima",
            "tags": [],
        }
        data.update(overrides)
        return Course.model_validate(data)
    return _make


@pytest.fixture
def make_progress():
    def _make(course_id="course-1", status="in_progress", **overrides):
        data = {"userId": "cand-1", "courseId": course_id, "status": status}
        data.update(overrides)
        return CourseProgress.model_validate(data)
    return _make
