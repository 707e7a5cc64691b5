"""Property-based tests for the eligibility and lifecycle rules."""

from datetime import datetime, timedelta

import pytest
from bson import ObjectId
from hypothesis import given, strategies as st

from jobportal.core.actor import Actor
from jobportal.core.errors import BadRequest, Forbidden
from jobportal.schemas.schemas import ApplicationStatus, UserRole
from jobportal.services.eligibility import (
    ALLOWED_RESUME_TYPES,
    ResumeUpload,
    check_employer_can_hide,
    check_resume,
    check_same_job_cap,
    check_window_cap,
    require_job_id,
    require_owner,
    require_role,
    window_start,
)


roles = st.sampled_from([role.value for role in UserRole] + ["Admin", ""])
content_types = st.one_of(
    st.sampled_from(sorted(ALLOWED_RESUME_TYPES)),
    st.sampled_from(["image/gif", "text/plain", "application/msword", "image/jpg", ""]),
    st.text(max_size=30),
)


class TestRoleAndOwnership:

    @given(role=roles)
    def test_only_job_seekers_pass_the_seeker_gate(self, role):
        actor = Actor(actor_id=ObjectId(), role=role)
        if role == UserRole.job_seeker.value:
            require_role(actor, UserRole.job_seeker, "nope")
        else:
            with pytest.raises(Forbidden):
                require_role(actor, UserRole.job_seeker, "nope")

    def test_owner_matches_by_value_not_type(self):
        owner = ObjectId()
        actor = Actor(actor_id=owner, role=UserRole.employer.value)
        require_owner(actor, owner)
        require_owner(actor, str(owner))

    def test_non_owner_is_forbidden(self):
        actor = Actor(actor_id=ObjectId(), role=UserRole.employer.value)
        with pytest.raises(Forbidden) as exc:
            require_owner(actor, ObjectId())
        assert exc.value.message == "Not authorized."


class TestSubmissionGate:

    @pytest.mark.parametrize("job_id", [None, ""])
    def test_job_id_is_required(self, job_id):
        with pytest.raises(BadRequest):
            require_job_id(job_id)

    @given(existing=st.integers(min_value=0, max_value=50), limit=st.integers(min_value=1, max_value=20))
    def test_same_job_cap(self, existing, limit):
        if existing >= limit:
            with pytest.raises(BadRequest):
                check_same_job_cap(existing, limit)
        else:
            check_same_job_cap(existing, limit)

    @given(existing=st.integers(min_value=0, max_value=50), limit=st.integers(min_value=1, max_value=20))
    def test_window_cap(self, existing, limit):
        if existing >= limit:
            with pytest.raises(BadRequest):
                check_window_cap(existing, limit, 30)
        else:
            check_window_cap(existing, limit, 30)

    def test_cap_message_states_the_enforced_number(self):
        with pytest.raises(BadRequest) as exc:
            check_same_job_cap(10, 10)
        assert "10" in exc.value.message

    @given(now=st.datetimes(min_value=datetime(2001, 1, 1)), days=st.integers(min_value=1, max_value=365))
    def test_window_start_is_exactly_days_before_now(self, now, days):
        assert now - window_start(now, days) == timedelta(days=days)

    @given(content_type=content_types)
    def test_resume_content_types(self, content_type):
        upload = ResumeUpload(content=b"x", content_type=content_type)
        if content_type in ALLOWED_RESUME_TYPES:
            assert check_resume(upload) is upload
        else:
            with pytest.raises(BadRequest):
                check_resume(upload)

    def test_missing_or_empty_resume_is_rejected(self):
        with pytest.raises(BadRequest):
            check_resume(None)
        with pytest.raises(BadRequest):
            check_resume(ResumeUpload(content=b"", content_type="application/pdf"))

    def test_pdf_is_flagged_raw(self):
        assert ResumeUpload(content=b"x", content_type="application/pdf").is_pdf
        assert not ResumeUpload(content=b"x", content_type="image/png").is_pdf


class TestLifecycle:

    @given(status=st.sampled_from([s.value for s in ApplicationStatus]))
    def test_employer_may_hide_only_rejected(self, status):
        application = {"status": status}
        if status == ApplicationStatus.rejected.value:
            check_employer_can_hide(application)
        else:
            with pytest.raises(BadRequest):
                check_employer_can_hide(application)
