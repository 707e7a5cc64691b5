"""
Dependency providers - stores, collaborators and services for the routes.

Override any of these with app.dependency_overrides to swap in test
doubles.
"""

from functools import lru_cache

from fastapi import Depends

from jobportal.services.application_service import ApplicationService
from jobportal.services.job_service import JobService
from jobportal.services.mail import MailService
from jobportal.services.mongo_service import ApplicationStore, JobStore, UserStore
from jobportal.services.resume_service import ResumeAnalysisService
from jobportal.services.storage import ResumeStorage
from jobportal.services.user_service import UserService


def get_user_store() -> UserStore:
    return UserStore()


def get_job_store() -> JobStore:
    return JobStore()


def get_application_store() -> ApplicationStore:
    return ApplicationStore()


@lru_cache()
def get_resume_storage() -> ResumeStorage:
    return ResumeStorage()


@lru_cache()
def get_mail_service() -> MailService:
    return MailService()


@lru_cache()
def get_resume_analysis_service() -> ResumeAnalysisService:
    return ResumeAnalysisService()


def get_user_service(
    users: UserStore = Depends(get_user_store),
    mail: MailService = Depends(get_mail_service),
) -> UserService:
    return UserService(users, mail)


def get_job_service(jobs: JobStore = Depends(get_job_store)) -> JobService:
    return JobService(jobs)


def get_application_service(
    applications: ApplicationStore = Depends(get_application_store),
    jobs: JobStore = Depends(get_job_store),
    users: UserStore = Depends(get_user_store),
    storage: ResumeStorage = Depends(get_resume_storage),
) -> ApplicationService:
    return ApplicationService(applications, jobs, users, storage)
