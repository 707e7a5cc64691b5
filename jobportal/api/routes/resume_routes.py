"""
Resume Routes

POST /resume/analyze - OCR a resume image (or PDF) and score it with AI
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from jobportal.api.deps import get_resume_analysis_service
from jobportal.core.actor import Actor
from jobportal.core.auth import get_actor
from jobportal.core.errors import BadRequest
from jobportal.services.resume_service import ResumeAnalysisService

router = APIRouter(prefix="/resume", tags=["Resume"])


@router.post("/analyze")
def analyze_resume(
    resumeImage: Optional[UploadFile] = File(None, description="Resume image (JPG/PNG) or PDF"),
    actor: Actor = Depends(get_actor),
    service: ResumeAnalysisService = Depends(get_resume_analysis_service),
):
    """
    Score a resume.

    Returns {score, improvementPoints, generalFeedback}.
    """
    if resumeImage is None:
        raise BadRequest("Please upload a résumé image (JPG/PNG) or PDF.")
    analysis = service.analyze(actor, resumeImage.file.read(), resumeImage.content_type or "")
    return {"success": True, "analysis": analysis}
