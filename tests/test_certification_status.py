"""
Tests for certification expiry evaluation
"""
from datetime import datetime, timedelta, timezone

import pytest

from pecem_ai.models.candidate_models import CandidateCertification
from pecem_ai.services.certification_status import (
    get_certification_status,
    get_days_until_expiry,
    is_certification_active,
    is_certification_valid,
    resolve_now,
    summarize_certifications,
)
from tests.conftest import NOW


def cert_expiring_in(delta: timedelta, verified=True):
    return CandidateCertification(
        certification_id="NR-35",
        issue_date=NOW - timedelta(days=700),
        expiry_date=NOW + delta,
        verified=verified,
    )


class TestDaysUntilExpiry:
    """Whole days until expiry"""

    def test_exact_days(self):
        """Exact day offsets are returned as-is"""
        assert get_days_until_expiry(cert_expiring_in(timedelta(days=10)), NOW) == 10

    def test_partial_day_is_floored(self):
        """A partial day rounds down"""
        assert get_days_until_expiry(cert_expiring_in(timedelta(days=10, hours=-1)), NOW) == 9

    def test_negative_once_expired(self):
        """One hour past expiry is already day -1"""
        assert get_days_until_expiry(cert_expiring_in(timedelta(hours=-1)), NOW) == -1


class TestCertificationStatus:
    """Status partitions the day axis into expired / expiring / active"""

    @pytest.mark.parametrize("delta, expected", [
        (timedelta(days=-30), "expired"),
        (timedelta(hours=-1), "expired"),
        (timedelta(hours=1), "expiring"),
        (timedelta(days=59), "expiring"),
        (timedelta(days=60), "active"),
        (timedelta(days=400), "active"),
    ])
    def test_boundaries(self, delta, expected):
        """Each interval boundary lands in exactly one status"""
        assert get_certification_status(cert_expiring_in(delta), NOW) == expected

    def test_unverified_does_not_change_status(self):
        """Verification does not affect the expiry status"""
        assert get_certification_status(cert_expiring_in(timedelta(days=100), verified=False), NOW) == "active"


class TestValidity:
    """Valid vs active certifications"""

    def test_unverified_is_valid_but_not_active(self):
        """Unexpired but unverified certifications are valid, not active"""
        cert = cert_expiring_in(timedelta(days=30), verified=False)
        assert is_certification_valid(cert, NOW)
        assert not is_certification_active(cert, NOW)

    def test_expired_is_neither(self):
        """Expired certifications are neither valid nor active"""
        cert = cert_expiring_in(timedelta(days=-1))
        assert not is_certification_valid(cert, NOW)
        assert not is_certification_active(cert, NOW)

    def test_expiring_exactly_now_is_not_valid(self):
        """Expiry must be strictly in the future"""
        assert not is_certification_valid(cert_expiring_in(timedelta(0)), NOW)


class TestClock:
    """Clock handling"""

    def test_naive_now_is_utc(self):
        """A naive clock value is read as UTC"""
        assert resolve_now(datetime(2025, 3, 1, 12, 0)) == NOW

    def test_default_is_aware(self):
        """Without a pinned clock the current UTC time is used"""
        assert resolve_now().tzinfo is not None

    def test_naive_record_dates_are_utc(self):
        """Naive dates in records are read as UTC"""
        cert = CandidateCertification.model_validate({
            "certificationId": "NR-10",
            "issueDate": "2024-01-01T00:00:00",
            "expiryDate": "2026-01-01T00:00:00",
            "verified": True,
        })
        assert cert.expiry_date.tzinfo == timezone.utc
        assert is_certification_active(cert, NOW)


class TestSummary:
    """Dashboard certification counts"""

    def test_counts_each_status(self, make_candidate, make_cert):
        """One certification of each status"""
        candidate = make_candidate(certifications=[
            make_cert("NR-10", days_left=365),
            make_cert("NR-11", days_left=30),
            make_cert("NR-35", days_left=-10),
        ])
        summary = summarize_certifications(candidate, NOW)

        assert (summary.active, summary.expiring, summary.expired) == (1, 1, 1)
        assert [c.certification_id for c in summary.valid_certifications] == ["NR-10", "NR-11"]
        assert [c.certification_id for c in summary.expired_certifications] == ["NR-35"]

    def test_empty(self, make_candidate):
        """No certifications means all zeros"""
        summary = summarize_certifications(make_candidate(), NOW)
        assert (summary.active, summary.expiring, summary.expired) == (0, 0, 0)
