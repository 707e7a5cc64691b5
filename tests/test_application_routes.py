"""HTTP tests for /api/v1/application."""

import pytest
from bson import ObjectId

from jobportal.core.security import create_access_token
from jobportal.db.query import QuerySpec
from tests.conftest import EMPLOYER, SEEKER, application_form, auth_headers

BASE = "/api/v1/application"


@pytest.fixture
def employer(make_user):
    return make_user(role=EMPLOYER)


@pytest.fixture
def seeker(make_user):
    return make_user(role=SEEKER)


@pytest.fixture
def job(make_job, employer):
    return make_job(employer)


def apply(client, seeker, job, content_type="image/png", **form):
    data = application_form(**form)
    data["jobId"] = str(job["_id"])
    return client.post(
        f"{BASE}/post",
        data=data,
        files={"resume": ("cv.png", b"resume-bytes", content_type)},
        headers=auth_headers(seeker),
    )


class TestSubmit:

    def test_submit(self, client, seeker, job, employer, storage):
        response = apply(client, seeker, job)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Application Submitted!"
        assert body["application"]["status"] == "Pending"
        assert body["application"]["employerID"]["user"] == str(employer["_id"])
        assert storage.upload.call_args.args[:3] == (b"resume-bytes", "image/png", "cv.png")

    def test_unauthenticated(self, client, job):
        response = client.post(f"{BASE}/post", data={"jobId": str(job["_id"])})
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "User Not Authorized"}

    def test_cookie_authentication(self, client, seeker, job):
        token = create_access_token({"sub": str(seeker["_id"]), "role": seeker["role"]})
        client.cookies.set("token", token)
        response = client.post(
            f"{BASE}/post",
            data={**application_form(), "jobId": str(job["_id"])},
            files={"resume": ("cv.png", b"resume-bytes", "image/png")},
        )
        assert response.status_code == 200

    def test_garbage_token(self, client):
        response = client.get(f"{BASE}/jobseeker/getall", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 400
        assert response.json()["message"] == "JWT is invalid, try again!"

    def test_employer_cannot_apply(self, client, employer, job):
        response = apply(client, employer, job)
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_missing_job_id(self, client, seeker):
        response = client.post(
            f"{BASE}/post",
            data=application_form(),
            files={"resume": ("cv.png", b"resume-bytes", "image/png")},
            headers=auth_headers(seeker),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Job ID is required"

    def test_missing_resume(self, client, seeker, job):
        response = client.post(
            f"{BASE}/post",
            data={**application_form(), "jobId": str(job["_id"])},
            headers=auth_headers(seeker),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Resume File Required!"

    def test_unsupported_resume_type(self, client, seeker, job, storage, applications):
        response = apply(client, seeker, job, content_type="text/plain")
        assert response.status_code == 400
        storage.upload.assert_not_called()
        assert applications.count(QuerySpec()) == 0

    def test_unknown_job(self, client, seeker):
        response = apply(client, seeker, {"_id": ObjectId()})
        assert response.status_code == 404
        assert response.json()["message"] == "Job not found!"


class TestLifecycleRoutes:

    def test_full_flow(self, client, seeker, employer, job):
        application_id = apply(client, seeker, job).json()["application"]["_id"]

        response = client.put(
            f"{BASE}/update/{application_id}",
            json={"status": "Rejected", "reply": "Not a fit"},
            headers=auth_headers(employer),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Application rejected."

        response = client.delete(f"{BASE}/employer/delete/{application_id}", headers=auth_headers(employer))
        assert response.json() == {"message": "Application removed from your view.", "success": True}

        employer_view = client.get(f"{BASE}/employer/getall", headers=auth_headers(employer)).json()
        assert employer_view == {"success": True, "applications": []}

        [seen] = client.get(f"{BASE}/jobseeker/getall", headers=auth_headers(seeker)).json()["applications"]
        assert seen["status"] == "Rejected"
        assert seen["reply"] == "Not a fit"
        assert seen["job"]["title"] == job["title"]

    def test_employer_cannot_hide_pending(self, client, seeker, employer, job):
        application_id = apply(client, seeker, job).json()["application"]["_id"]
        response = client.delete(f"{BASE}/employer/delete/{application_id}", headers=auth_headers(employer))
        assert response.status_code == 400
        assert response.json()["message"] == "Can only delete rejected applications."

    def test_invalid_status(self, client, seeker, employer, job):
        application_id = apply(client, seeker, job).json()["application"]["_id"]
        response = client.put(
            f"{BASE}/update/{application_id}",
            json={"status": "Maybe"},
            headers=auth_headers(employer),
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_malformed_id(self, client, seeker):
        response = client.delete(f"{BASE}/delete/not-an-id", headers=auth_headers(seeker))
        assert response.status_code == 400
        assert response.json()["message"] == "Resource not found. Invalid id"

    def test_seeker_delete(self, client, seeker, employer, job):
        application_id = apply(client, seeker, job).json()["application"]["_id"]
        response = client.delete(f"{BASE}/delete/{application_id}", headers=auth_headers(seeker))
        assert response.json()["message"] == "Application Deleted!"

        assert client.get(f"{BASE}/jobseeker/getall", headers=auth_headers(seeker)).json()["applications"] == []
        assert client.get(f"{BASE}/employer/getall", headers=auth_headers(employer)).json()["applications"] == []

    def test_other_seeker_cannot_delete(self, client, seeker, job, make_user):
        application_id = apply(client, seeker, job).json()["application"]["_id"]
        intruder = make_user(role=SEEKER)
        response = client.delete(f"{BASE}/delete/{application_id}", headers=auth_headers(intruder))
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized."
