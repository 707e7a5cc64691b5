"""Tests for the S3 resume store and the SendGrid mailer."""

from unittest.mock import Mock
from urllib.parse import quote

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from jobportal.core.config import Settings
from jobportal.services.mail import MailError, MailService
from jobportal.services.storage import RAW_CONTENT_TYPE, ResumeStorage, StorageError


@pytest.fixture
def s3():
    return Mock()


@pytest.fixture
def resume_storage(s3):
    settings = Settings(s3_bucket="resumes-bucket", s3_public_base_url="https://cdn.example.com/")
    return ResumeStorage(settings=settings, client=s3)


class TestResumeStorage:

    def test_image_keeps_content_type(self, resume_storage, s3):
        stored = resume_storage.upload(b"png", "image/png", "cv.png")

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "resumes-bucket"
        assert kwargs["ContentType"] == "image/png"
        assert "ContentDisposition" not in kwargs
        assert kwargs["Key"].startswith("resumes/image/")
        assert kwargs["Key"].endswith("-cv.png")
        assert stored.id == kwargs["Key"]
        assert stored.url == f"https://cdn.example.com/{kwargs['Key']}"

    def test_pdf_stored_raw(self, resume_storage, s3):
        stored = resume_storage.upload(b"%PDF", "application/pdf", "cv.pdf", raw=True)

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["ContentType"] == RAW_CONTENT_TYPE
        assert kwargs["ContentDisposition"] == 'attachment; filename="cv.pdf"'
        assert stored.id.startswith("resumes/raw/")

    def test_non_ascii_filename_is_made_safe(self, resume_storage, s3):
        stored = resume_storage.upload(b"%PDF", "application/pdf", "CV – João.pdf", raw=True)

        key = s3.put_object.call_args.kwargs["Key"]
        assert key.endswith("-CV_Joao.pdf")
        assert key.isascii()
        assert " " not in stored.url
        assert stored.url == f"https://cdn.example.com/{quote(key)}"

    def test_quotes_and_newlines_never_reach_headers(self, resume_storage, s3):
        resume_storage.upload(b"%PDF", "application/pdf", 'my "best"\r\nX-Evil: 1.pdf', raw=True)

        disposition = s3.put_object.call_args.kwargs["ContentDisposition"]
        filename = disposition[len('attachment; filename="'):-1]
        assert '"' not in filename
        assert "\r" not in disposition and "\n" not in disposition

    def test_unusable_filename_falls_back(self, resume_storage, s3):
        resume_storage.upload(b"png", "image/png", "../..")
        assert s3.put_object.call_args.kwargs["Key"].endswith("-resume")

    def test_keys_are_unique(self, resume_storage):
        first = resume_storage.upload(b"a", "image/png", "cv.png")
        second = resume_storage.upload(b"a", "image/png", "cv.png")
        assert first.id != second.id

    @pytest.mark.parametrize("error", [
        ClientError({"Error": {"Code": "AccessDenied", "Message": "nope"}}, "PutObject"),
        EndpointConnectionError(endpoint_url="https://s3.example.com"),
    ])
    def test_upload_errors(self, resume_storage, s3, error):
        s3.put_object.side_effect = error
        with pytest.raises(StorageError):
            resume_storage.upload(b"png", "image/png")


class TestStorageBaseUrl:

    def test_custom_endpoint(self):
        settings = Settings(s3_endpoint="http://minio:9000/", s3_bucket="b")
        assert settings.storage_base_url == "http://minio:9000/b"

    def test_aws_default(self):
        assert Settings(s3_bucket="b").storage_base_url == "https://b.s3.amazonaws.com"


class TestMailService:

    @pytest.fixture
    def sendgrid(self):
        client = Mock()
        client.send.return_value = Mock(status_code=202)
        return client

    @pytest.fixture
    def mail_service(self, sendgrid):
        return MailService(settings=Settings(sendgrid_from="noreply@example.com"), client=sendgrid)

    def test_send(self, mail_service, sendgrid):
        assert mail_service.send("someone@example.com", "Hello", "Body text") == 202

        message = sendgrid.send.call_args.args[0]
        payload = message.get()
        assert payload["from"]["email"] == "noreply@example.com"
        assert payload["subject"] == "Hello"
        assert payload["personalizations"][0]["to"][0]["email"] == "someone@example.com"

    def test_failure_becomes_mail_error(self, mail_service, sendgrid):
        sendgrid.send.side_effect = RuntimeError("HTTP Error 401: Unauthorized")
        with pytest.raises(MailError):
            mail_service.send("someone@example.com", "Hello", "Body text")
