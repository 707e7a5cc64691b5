"""
Job Service - postings owned by employers.

Jobs are referenced by applications (job, and postedBy as the employer
snapshot) but carry no application rules of their own.
"""

import logging
from typing import Callable, List

from jobportal.core.actor import Actor
from jobportal.core.errors import BadRequest, NotFound
from jobportal.db.query import QuerySpec
from jobportal.schemas.schemas import JobCreate, JobUpdate, UserRole, check_salary_fields
from jobportal.services.eligibility import require_owner, require_role
from jobportal.services.mongo_service import JobStore
from jobportal.utils.clock import utcnow

logger = logging.getLogger(__name__)

LIVE = QuerySpec().where("expired", False)


class JobService:

    def __init__(self, jobs: JobStore, clock: Callable = utcnow):
        self.jobs = jobs
        self.clock = clock

    def list_live(self) -> List[dict]:
        return self.jobs.find(LIVE, sort_by="jobPostedOn")

    def count_live(self) -> int:
        return self.jobs.count(LIVE)

    def recommended(self, user: dict) -> List[dict]:
        """Live jobs in the user's preferred categories (all live jobs if none set)."""
        categories = user.get("preferredCategories") or []
        if not categories:
            return self.list_live()
        return self.jobs.find(LIVE.one_of("category", categories), sort_by="jobPostedOn")

    def get(self, job_id: str) -> dict:
        job = self.jobs.find_by_id(job_id)
        if not job:
            raise NotFound("Job not found.")
        return job

    def post(self, actor: Actor, data: JobCreate) -> dict:
        require_role(actor, UserRole.employer, "Job Seeker not allowed to access this resource.")
        job = data.model_dump(exclude_none=True)
        job.update({
            "expired": False,
            "jobPostedOn": self.clock(),
            "postedBy": actor.actor_id,
        })
        job = self.jobs.create(job)
        logger.info("Job %s posted by %s", job["_id"], actor.actor_id)
        return job

    def my_jobs(self, actor: Actor) -> List[dict]:
        require_role(actor, UserRole.employer, "Job Seeker not allowed to access this resource.")
        return self.jobs.find(QuerySpec().where("postedBy", actor.actor_id), sort_by="jobPostedOn")

    def update(self, actor: Actor, job_id: str, data: JobUpdate) -> dict:
        require_role(actor, UserRole.employer, "Job Seeker not allowed to access this resource.")
        job = self.get(job_id)
        require_owner(actor, job["postedBy"])

        updates = data.model_dump(exclude_none=True)
        # Switching salary style drops the other style
        if "fixedSalary" in updates:
            job.pop("salaryFrom", None)
            job.pop("salaryTo", None)
        elif "salaryFrom" in updates or "salaryTo" in updates:
            job.pop("fixedSalary", None)
        job.update(updates)
        try:
            check_salary_fields(job.get("fixedSalary"), job.get("salaryFrom"), job.get("salaryTo"))
        except ValueError as e:
            raise BadRequest(str(e))
        self.jobs.save(job)
        return job

    def delete(self, actor: Actor, job_id: str) -> None:
        require_role(actor, UserRole.employer, "Job Seeker not allowed to access this resource.")
        job = self.get(job_id)
        require_owner(actor, job["postedBy"])
        self.jobs.delete(job)
        logger.info("Job %s deleted by %s", job["_id"], actor.actor_id)
