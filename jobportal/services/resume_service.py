"""
Resume Analysis Service - OCR a resume, then score it with AI.

Workflow:
1. Only job seekers may analyze
2. Validate the upload (type, size)
3. Extract text (Tesseract for images, PyPDF2 for PDFs)
4. Ask the AI for {score, improvementPoints, generalFeedback}
5. Validate the AI output before returning it
"""

import logging
from typing import Optional

from jobportal.core.actor import Actor
from jobportal.core.config import Settings, get_settings
from jobportal.core.errors import BadRequest, InternalError
from jobportal.schemas.schemas import UserRole
from jobportal.services.ai_client import AIClient, AIResponseError, AIServiceError, get_ai_client
from jobportal.services.eligibility import require_role
from jobportal.utils.file_upload import OCRError, extract_text, validate_upload

logger = logging.getLogger(__name__)

MAX_IMPROVEMENT_POINTS = 5


def validate_analysis(data: dict) -> dict:
    """
    Validate and sanitize the AI analysis.
    Ensures all keys exist with correct types.
    """
    validated = {
        "score": 0,
        "improvementPoints": [],
        "generalFeedback": str(data.get("generalFeedback", "")).strip(),
    }

    # Score is an integer clamped to 0-100
    try:
        validated["score"] = min(100, max(0, int(round(float(data.get("score", 0))))))
    except (ValueError, TypeError):
        validated["score"] = 0

    points = data.get("improvementPoints", [])
    if isinstance(points, list):
        validated["improvementPoints"] = [str(p).strip() for p in points if p][:MAX_IMPROVEMENT_POINTS]

    return validated


class ResumeAnalysisService:

    def __init__(self, ai_client: Optional[AIClient] = None, settings: Settings = None):
        self._ai_client = ai_client
        self.settings = settings or get_settings()

    @property
    def ai_client(self) -> AIClient:
        if self._ai_client is None:
            self._ai_client = get_ai_client()
        return self._ai_client

    def analyze(self, actor: Actor, content: bytes, content_type: str) -> dict:
        require_role(actor, UserRole.job_seeker, "Only job seekers can analyze résumés.")
        validate_upload(content, content_type, self.settings.max_resume_image_mb)

        try:
            resume_text = extract_text(content, content_type)
        except OCRError:
            raise InternalError("Failed to extract text from résumé.")

        if not resume_text:
            raise BadRequest("Could not read any text from the uploaded résumé.")

        try:
            analysis = self.ai_client.analyze_resume(resume_text)
        except AIServiceError:
            raise InternalError("Failed to analyze résumé with AI.")
        except AIResponseError:
            raise InternalError("AI did not return valid JSON.")

        logger.info("Analyzed resume for user %s", actor.actor_id)
        return validate_analysis(analysis)
