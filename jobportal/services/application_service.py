"""
Application Service - the application ledger.

Submission, listings, status updates and the two kinds of delete. Every
method takes the acting user explicitly and re-checks role (and, where a
record is involved, ownership) before touching anything.

Visibility:
- the seeker always sees every application they submitted
- the employer sees theirs unless employerDeleted is set
- employerDeleted is only ever set on Rejected applications
- only the seeker removes the record itself, for both parties

Caps are counted and then the insert happens, with no transaction in
between: concurrent submissions can briefly exceed them.
"""

import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from jobportal.core.actor import Actor
from jobportal.core.config import Settings, get_settings
from jobportal.core.errors import BadRequest, InternalError, NotFound
from jobportal.db.query import QuerySpec
from jobportal.schemas.schemas import ApplicationForm, ApplicationStatus, UserRole, first_error_message
from jobportal.services.eligibility import (
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
from jobportal.services.mongo_service import ApplicationStore, JobStore, UserStore, to_object_id
from jobportal.services.storage import ResumeStorage, StorageError
from jobportal.utils.clock import utcnow

logger = logging.getLogger(__name__)


class ApplicationService:

    def __init__(
        self,
        applications: ApplicationStore,
        jobs: JobStore,
        users: UserStore,
        storage: ResumeStorage,
        settings: Settings = None,
        clock: Callable = utcnow,
    ):
        self.applications = applications
        self.jobs = jobs
        self.users = users
        self.storage = storage
        self.settings = settings or get_settings()
        self.clock = clock

    # ============================================================
    # SUBMISSION
    # ============================================================

    def post_application(
        self,
        actor: Actor,
        job_id: Optional[str],
        form: dict,
        resume: Optional[ResumeUpload],
    ) -> dict:
        """
        Gate and create a new application.

        Steps stop at the first failure. A resume that was uploaded before
        the job lookup fails stays in storage.
        """
        require_role(actor, UserRole.job_seeker, "Only job seekers can apply.")
        job_oid = to_object_id(require_job_id(job_id), "jobId")

        mine = QuerySpec().where("applicantID.user", actor.actor_id)

        check_same_job_cap(
            self.applications.count(mine.where("job", job_oid)),
            self.settings.max_applications_per_job,
        )

        since = window_start(self.clock(), self.settings.application_window_days)
        check_window_cap(
            self.applications.count(mine.at_least("createdAt", since)),
            self.settings.max_applications_per_window,
            self.settings.application_window_days,
        )

        resume = check_resume(resume)
        try:
            stored = self.storage.upload(resume.content, resume.content_type, resume.filename, raw=resume.is_pdf)
        except StorageError:
            raise InternalError("Failed to upload Resume")

        job = self.jobs.find_by_id(job_oid, "jobId")
        if not job:
            raise NotFound("Job not found!")

        try:
            content = ApplicationForm(**form)
        except ValidationError as e:
            raise BadRequest(first_error_message(e))

        application = {
            "job": job_oid,
            "name": content.name,
            "email": content.email,
            "coverLetter": content.coverLetter,
            "phone": content.phone,
            "address": content.address,
            "applicantID": {"user": actor.actor_id, "role": UserRole.job_seeker.value},
            "employerID": {"user": job["postedBy"], "role": UserRole.employer.value},
            "resume": {"public_id": stored.id, "url": stored.url},
            "status": ApplicationStatus.pending.value,
            "reply": "",
            "employerDeleted": False,
            "createdAt": self.clock(),
        }
        application = self.applications.create(application)
        logger.info("Application %s submitted by %s for job %s", application["_id"], actor.actor_id, job_oid)
        return application

    # ============================================================
    # LISTINGS
    # ============================================================

    def list_for_employer(self, actor: Actor) -> List[dict]:
        require_role(actor, UserRole.employer, "Only employers can view.")
        query = QuerySpec().where("employerID.user", actor.actor_id).where("employerDeleted", False)
        return self.applications.populate(
            self.applications.find(query, sort_by="createdAt"), self.users, self.jobs
        )

    def list_for_seeker(self, actor: Actor) -> List[dict]:
        require_role(actor, UserRole.job_seeker, "Only seekers can view.")
        query = QuerySpec().where("applicantID.user", actor.actor_id)
        return self.applications.populate(
            self.applications.find(query, sort_by="createdAt"), self.users, self.jobs
        )

    # ============================================================
    # LIFECYCLE
    # ============================================================

    def _get(self, application_id: str) -> dict:
        application = self.applications.find_by_id(application_id)
        if not application:
            raise NotFound("Application not found!")
        return application

    def employer_delete(self, actor: Actor, application_id: str) -> dict:
        """Hide a rejected application from the employer's listing only."""
        require_role(actor, UserRole.employer, "Only employers can delete here.")
        application = self._get(application_id)
        require_owner(actor, application["employerID"]["user"])
        check_employer_can_hide(application)

        application["employerDeleted"] = True
        self.applications.save(application)
        logger.info("Application %s hidden by employer %s", application["_id"], actor.actor_id)
        return application

    def seeker_delete(self, actor: Actor, application_id: str) -> None:
        """Remove the application for both parties."""
        require_role(actor, UserRole.job_seeker, "Only seekers can delete.")
        application = self._get(application_id)
        require_owner(actor, application["applicantID"]["user"])

        self.applications.delete(application)
        logger.info("Application %s deleted by seeker %s", application["_id"], actor.actor_id)

    def update_status(
        self,
        actor: Actor,
        application_id: str,
        status: ApplicationStatus,
        reply: Optional[str] = None,
    ) -> dict:
        """Any status may follow any other; only the owning employer decides."""
        require_role(actor, UserRole.employer, "Only employers can update.")
        application = self._get(application_id)
        require_owner(actor, application["employerID"]["user"])

        application["status"] = ApplicationStatus(status).value
        application["reply"] = reply or ""
        self.applications.save(application)
        logger.info("Application %s set to %s by %s", application["_id"], application["status"], actor.actor_id)
        return application
