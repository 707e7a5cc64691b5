"""
Eligibility & Lifecycle Policy - pure decision rules for applications.

Nothing here touches the database or the network. The application
service queries the ledger, hands the numbers / records to these checks,
and each check either returns quietly or raises the error kind the
caller should see.

Submission gate (in this order, first failure wins):
1. actor is a Job Seeker                          -> Forbidden
2. jobId present                                  -> BadRequest
3. fewer than N applications to this job          -> BadRequest
4. fewer than M applications in the rolling window -> BadRequest
5. resume present with an allowed content type    -> BadRequest

Lifecycle:
- only the owning employer changes status or hides a record
- an employer may hide only Rejected applications
- only the owning seeker removes a record
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jobportal.core.actor import Actor
from jobportal.core.errors import BadRequest, Forbidden
from jobportal.schemas.schemas import ApplicationStatus, UserRole


PDF_CONTENT_TYPE = "application/pdf"

ALLOWED_RESUME_TYPES = frozenset({
    "image/png",
    "image/jpeg",
    "image/webp",
    PDF_CONTENT_TYPE,
})


@dataclass(frozen=True)
class ResumeUpload:
    """A resume file as received from the client."""
    content: bytes
    content_type: str
    filename: str = "resume"

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_CONTENT_TYPE


# ============================================================
# ROLE AND OWNERSHIP
# ============================================================

def require_role(actor: Actor, role: UserRole, message: str) -> None:
    if actor.role != role.value:
        raise Forbidden(message)


def require_owner(actor: Actor, owner_id) -> None:
    """The actor must be the user referenced by owner_id."""
    if str(owner_id) != str(actor.actor_id):
        raise Forbidden("Not authorized.")


# ============================================================
# SUBMISSION GATE
# ============================================================

def require_job_id(job_id: Optional[str]) -> str:
    if not job_id:
        raise BadRequest("Job ID is required")
    return job_id


def check_same_job_cap(existing: int, limit: int) -> None:
    """existing = applications by this actor to this job."""
    if existing >= limit:
        raise BadRequest(f"You can only apply to the same job {limit} times.")


def window_start(now: datetime, days: int) -> datetime:
    """Inclusive lower bound of the rolling window ending at now."""
    return now - timedelta(days=days)


def check_window_cap(existing: int, limit: int, days: int) -> None:
    """existing = applications by this actor created since window_start()."""
    if existing >= limit:
        raise BadRequest(f"You can only apply to {limit} jobs per {days} days.")


def check_resume(resume: Optional[ResumeUpload]) -> ResumeUpload:
    if resume is None or not resume.content:
        raise BadRequest("Resume File Required!")
    if resume.content_type not in ALLOWED_RESUME_TYPES:
        raise BadRequest("Invalid file type. Please upload PNG, JPEG, WEBP or PDF.")
    return resume


# ============================================================
# LIFECYCLE
# ============================================================

def check_employer_can_hide(application: dict) -> None:
    """Soft delete is reachable only from Rejected."""
    if application.get("status") != ApplicationStatus.rejected.value:
        raise BadRequest("Can only delete rejected applications.")
