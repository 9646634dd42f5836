# silver_talent/api/routes/applications.py
from fastapi import APIRouter, BackgroundTasks, Depends, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from typing import Optional

from silver_talent.dependencies import get_application_service
from silver_talent.models.application import ApplicationResponse, ApplicationStatusUpdate
from silver_talent.services.application_service import ApplicationService
from silver_talent.services.media import read_upload

router = APIRouter()


@router.post("/jobs/apply")
async def apply_for_job(
    background_tasks: BackgroundTasks,
    jobId: Optional[str] = Form(None),
    jobTitle: Optional[str] = Form(None),
    companyName: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    coverLetter: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    application_service: ApplicationService = Depends(get_application_service),
):
    fields = dict(jobId=jobId, jobTitle=jobTitle, companyName=companyName,
                  name=name, email=email, coverLetter=coverLetter)
    resume_upload = await read_upload(resume)
    return await run_in_threadpool(application_service.apply_for_job, fields, resume_upload, background_tasks)


@router.get("/applications")
def get_all_applications(
    page: Optional[str] = "1",
    limit: Optional[str] = "20",
    sort: Optional[str] = "-appliedDate",
    status_filter: Optional[str] = None,
    application_service: ApplicationService = Depends(get_application_service),
):
    return application_service.get_all_applications(page, limit, sort, status_filter)


@router.get("/applications/{application_id}")
def get_application(application_id: str,
                          application_service: ApplicationService = Depends(get_application_service)):
    return application_service.get_application(application_id)


@router.put("/applications/{application_id}/status")
def update_application_status(application_id: str, payload: ApplicationStatusUpdate,
                                    application_service: ApplicationService = Depends(get_application_service)):
    return application_service.update_status(application_id, payload)


@router.api_route("/applications/{application_id}/respond", methods=["PUT", "POST"])
def respond_to_application(application_id: str, payload: ApplicationResponse,
                                 application_service: ApplicationService = Depends(get_application_service)):
    return application_service.respond(application_id, payload)
