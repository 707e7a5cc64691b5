"""
Application Routes

POST   /application/post                 - Submit application (job seeker)
GET    /application/employer/getall      - Applications received (employer)
GET    /application/jobseeker/getall     - Applications submitted (job seeker)
DELETE /application/delete/{id}          - Remove application for both parties (job seeker)
DELETE /application/employer/delete/{id} - Hide rejected application (employer)
PUT    /application/update/{id}          - Accept / reject with reply (employer)
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from jobportal.api.deps import get_application_service
from jobportal.core.actor import Actor
from jobportal.core.auth import get_actor
from jobportal.schemas.schemas import ApplicationStatusUpdate, MessageResponse
from jobportal.services.application_service import ApplicationService
from jobportal.services.eligibility import ResumeUpload
from jobportal.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/application", tags=["Applications"])


@router.post("/post")
def post_application(
    jobId: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    coverLetter: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    """Submit an application with a resume (PNG, JPEG, WEBP or PDF)."""
    upload = None
    if resume is not None:
        upload = ResumeUpload(
            content=resume.file.read(),
            content_type=resume.content_type or "",
            filename=resume.filename or "resume",
        )

    form = {
        "name": name,
        "email": email,
        "coverLetter": coverLetter,
        "phone": phone,
        "address": address,
    }
    application = service.post_application(actor, jobId, form, upload)
    return {
        "success": True,
        "message": "Application Submitted!",
        "application": serialize_doc(application),
    }


@router.get("/employer/getall")
def employer_get_all(
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    """Applications for the employer's jobs, minus the ones they removed."""
    return {"success": True, "applications": serialize_docs(service.list_for_employer(actor))}


@router.get("/jobseeker/getall")
def jobseeker_get_all(
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    """Every application the seeker submitted."""
    return {"success": True, "applications": serialize_docs(service.list_for_seeker(actor))}


@router.delete("/delete/{application_id}", response_model=MessageResponse)
def jobseeker_delete(
    application_id: str,
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    service.seeker_delete(actor, application_id)
    return MessageResponse(message="Application Deleted!")


@router.delete("/employer/delete/{application_id}", response_model=MessageResponse)
def employer_delete(
    application_id: str,
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    service.employer_delete(actor, application_id)
    return MessageResponse(message="Application removed from your view.")


@router.put("/update/{application_id}")
def update_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    actor: Actor = Depends(get_actor),
    service: ApplicationService = Depends(get_application_service),
):
    application = service.update_status(actor, application_id, update.status, update.reply)
    return {
        "success": True,
        "message": f"Application {application['status'].lower()}.",
        "application": serialize_doc(application),
    }
