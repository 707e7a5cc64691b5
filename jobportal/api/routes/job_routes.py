"""
Job Routes

GET    /job/getall       - List live jobs
GET    /job/count        - Count live jobs
GET    /job/recommended  - Live jobs in the user's preferred categories
POST   /job/post         - Post a job (employer)
GET    /job/getmyjobs    - Employer's own jobs
PUT    /job/update/{id}  - Update a job (owning employer)
DELETE /job/delete/{id}  - Delete a job (owning employer)
GET    /job/{id}         - Job details
"""

from fastapi import APIRouter, Depends

from jobportal.api.deps import get_job_service
from jobportal.core.actor import Actor
from jobportal.core.auth import get_actor, get_current_user
from jobportal.schemas.schemas import JobCreate, JobUpdate, MessageResponse
from jobportal.services.job_service import JobService
from jobportal.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/job", tags=["Jobs"])


@router.get("/getall")
def get_all_jobs(service: JobService = Depends(get_job_service)):
    return {"success": True, "jobs": serialize_docs(service.list_live())}


@router.get("/count")
def job_count(service: JobService = Depends(get_job_service)):
    return {"success": True, "count": service.count_live()}


@router.get("/recommended")
def recommended_jobs(user: dict = Depends(get_current_user), service: JobService = Depends(get_job_service)):
    return {"success": True, "jobs": serialize_docs(service.recommended(user))}


@router.post("/post")
def post_job(data: JobCreate, actor: Actor = Depends(get_actor), service: JobService = Depends(get_job_service)):
    job = service.post(actor, data)
    return {"success": True, "message": "Job Posted Successfully!", "job": serialize_doc(job)}


@router.get("/getmyjobs")
def get_my_jobs(actor: Actor = Depends(get_actor), service: JobService = Depends(get_job_service)):
    return {"success": True, "myJobs": serialize_docs(service.my_jobs(actor))}


@router.put("/update/{job_id}")
def update_job(
    job_id: str,
    data: JobUpdate,
    actor: Actor = Depends(get_actor),
    service: JobService = Depends(get_job_service),
):
    job = service.update(actor, job_id, data)
    return {"success": True, "message": "Job Updated!", "job": serialize_doc(job)}


@router.delete("/delete/{job_id}", response_model=MessageResponse)
def delete_job(job_id: str, actor: Actor = Depends(get_actor), service: JobService = Depends(get_job_service)):
    service.delete(actor, job_id)
    return MessageResponse(message="Job Deleted!")


@router.get("/{job_id}")
def get_job(job_id: str, user: dict = Depends(get_current_user), service: JobService = Depends(get_job_service)):
    return {"success": True, "job": serialize_doc(service.get(job_id))}
