"""Shared fixtures: in-process MongoDB, fake collaborators, a test client."""

from datetime import datetime, timedelta
from unittest.mock import Mock

import mongomock
import pytest
from fastapi.testclient import TestClient

from jobportal.api import deps
from jobportal.core.actor import Actor
from jobportal.core.config import Settings
from jobportal.core.security import create_access_token, hash_password
from jobportal.db.mongodb import init_mongo_indexes
from jobportal.main import app
from jobportal.services.application_service import ApplicationService
from jobportal.services.eligibility import ResumeUpload
from jobportal.services.mail import MailService
from jobportal.services.mongo_service import ApplicationStore, JobStore, UserStore
from jobportal.services.storage import ResumeStorage, StoredFile

SEEKER = "Job Seeker"
EMPLOYER = "Employer"
PASSWORD = "password123"

_password_hashes = {}


def password_hash(password: str = PASSWORD) -> str:
    # bcrypt is slow on purpose; hash each test password once
    if password not in _password_hashes:
        _password_hashes[password] = hash_password(password)
    return _password_hashes[password]


class FakeClock:
    """Settable clock; starts at a whole second so stored times compare exactly."""

    def __init__(self, start: datetime = datetime(2026, 3, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings():
    return Settings(
        jwt_secret_key="test-secret",
        frontend_url="http://portal.test",
        sendgrid_from="noreply@portal.test",
    )


@pytest.fixture
def db():
    database = mongomock.MongoClient().portal
    init_mongo_indexes(database)
    return database


@pytest.fixture
def users(db):
    return UserStore(db["users"])


@pytest.fixture
def jobs(db):
    return JobStore(db["jobs"])


@pytest.fixture
def applications(db):
    return ApplicationStore(db["applications"])


@pytest.fixture
def storage():
    fake = Mock(spec=ResumeStorage)
    fake.upload.return_value = StoredFile(id="resumes/image/abc-cv.png", url="https://cdn.test/resumes/image/abc-cv.png")
    return fake


@pytest.fixture
def mail():
    fake = Mock(spec=MailService)
    fake.send.return_value = 202
    return fake


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(applications, jobs, users, storage, settings, clock):
    return ApplicationService(applications, jobs, users, storage, settings=settings, clock=clock)


# ============================================================
# RECORD FACTORIES
# ============================================================

@pytest.fixture
def make_user(users):
    counter = {"n": 0}

    def _make(role: str = SEEKER, verified: bool = True, password: str = PASSWORD, **fields) -> dict:
        counter["n"] += 1
        doc = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "phone": "0123456789",
            "password": password_hash(password),
            "role": role,
            "address": "1 Main St",
            "skills": ["python"],
            "experience": "2 years",
            "education": "BSc",
            "preferredCategories": [],
            "isVerified": verified,
            "createdAt": datetime(2026, 1, 1),
        }
        doc.update(fields)
        return users.create(doc)

    return _make


@pytest.fixture
def make_job(jobs):
    def _make(employer: dict, **fields) -> dict:
        doc = {
            "title": "Backend Engineer",
            "description": "Build and run the portal backend services.",
            "category": "Engineering",
            "country": "India",
            "city": "Pune",
            "location": "Hinjewadi Phase 1",
            "fixedSalary": 50000,
            "expired": False,
            "jobPostedOn": datetime(2026, 1, 1),
            "postedBy": employer["_id"],
        }
        doc.update(fields)
        return jobs.create(doc)

    return _make


def actor_for(user: dict) -> Actor:
    return Actor(actor_id=user["_id"], role=user["role"])


def resume(content_type: str = "image/png") -> ResumeUpload:
    return ResumeUpload(content=b"resume-bytes", content_type=content_type, filename="cv.png")


def application_form(**overrides) -> dict:
    form = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "coverLetter": "I would like to join your team.",
        "phone": "9876543210",
        "address": "12 Park Road",
    }
    form.update(overrides)
    return form


# ============================================================
# HTTP
# ============================================================

@pytest.fixture
def client(users, jobs, applications, storage, mail):
    app.dependency_overrides[deps.get_user_store] = lambda: users
    app.dependency_overrides[deps.get_job_store] = lambda: jobs
    app.dependency_overrides[deps.get_application_store] = lambda: applications
    app.dependency_overrides[deps.get_resume_storage] = lambda: storage
    app.dependency_overrides[deps.get_mail_service] = lambda: mail
    # No lifespan: indexes are created on the mongomock db by the db fixture
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: dict) -> dict:
    token = create_access_token({"sub": str(user["_id"]), "role": user["role"]})
    return {"Authorization": f"Bearer {token}"}
