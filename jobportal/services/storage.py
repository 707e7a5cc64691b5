"""
Resume storage on S3-compatible object storage.

PDFs are stored as opaque binary objects (served as downloads); images
keep their own content type so browsers render them inline.
"""

import logging
import uuid
from dataclasses import dataclass
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from werkzeug.utils import secure_filename

from jobportal.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

RAW_CONTENT_TYPE = "application/octet-stream"


class StorageError(Exception):
    """Raised when an object could not be stored."""


@dataclass(frozen=True)
class StoredFile:
    id: str
    url: str


class ResumeStorage:
    def __init__(self, settings: Settings = None, client=None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            s3_kwargs = {}
            if self.settings.s3_endpoint:
                s3_kwargs["endpoint_url"] = self.settings.s3_endpoint
            if self.settings.s3_region:
                s3_kwargs["region_name"] = self.settings.s3_region
            self._client = boto3.client(
                "s3",
                aws_access_key_id=self.settings.s3_access_key,
                aws_secret_access_key=self.settings.s3_secret_key,
                config=Config(signature_version="s3v4", s3={"addressing_style": "virtual"}),
                **s3_kwargs,
            )
        return self._client

    def upload(self, content: bytes, content_type: str, filename: str = "resume", raw: bool = False) -> StoredFile:
        """Store the bytes under a fresh key and return its id and public URL."""
        filename = secure_filename(filename) or "resume"
        folder = "raw" if raw else "image"
        key = f"resumes/{folder}/{uuid.uuid4().hex}-{filename}"
        extra = {
            "ContentType": RAW_CONTENT_TYPE if raw else content_type,
        }
        if raw:
            extra["ContentDisposition"] = f'attachment; filename="{filename}"'

        try:
            self.client.put_object(Bucket=self.settings.s3_bucket, Key=key, Body=content, **extra)
        except (BotoCoreError, ClientError) as e:
            logger.error("Resume upload failed for %s: %s", key, e)
            raise StorageError(str(e)) from e

        return StoredFile(id=key, url=f"{self.settings.storage_base_url}/{quote(key)}")
