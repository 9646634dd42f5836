# silver_talent/api/routes/jobs.py
from fastapi import APIRouter, Depends, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from typing import Optional

from silver_talent.dependencies import get_job_service
from silver_talent.services.job_service import JobService
from silver_talent.services.media import read_upload
from silver_talent.services.validation import as_bool

router = APIRouter()


@router.get("/jobs")
def get_all_jobs(
    q: Optional[str] = None,
    category: Optional[str] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    page: Optional[str] = "1",
    limit: Optional[str] = "10",
    admin_view: Optional[str] = None,
    job_service: JobService = Depends(get_job_service),
):
    return job_service.get_all_jobs(q, category, location, type, page, limit, admin_view)


@router.get("/featured-companies")
def get_featured_companies(job_service: JobService = Depends(get_job_service)):
    return job_service.get_featured_companies()


@router.get("/filter-options")
def get_filter_options(job_service: JobService = Depends(get_job_service)):
    return job_service.get_filter_options()


@router.get("/jobs/{job_id}")
def get_job(job_id: str, job_service: JobService = Depends(get_job_service)):
    return job_service.get_job(job_id)


@router.post("/jobs", status_code=201)
async def create_job(
    title: Optional[str] = Form(None),
    company: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    skills: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    logoImage: Optional[UploadFile] = File(None),
    job_service: JobService = Depends(get_job_service),
):
    fields = dict(title=title, company=company, location=location, type=type, salary=salary,
                  category=category, description=description, skills=skills, rating=rating)
    logo = await read_upload(logoImage)
    return await run_in_threadpool(job_service.create_job, fields, logo)


@router.put("/jobs/{job_id}")
async def update_job(
    job_id: str,
    title: Optional[str] = Form(None),
    company: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    skills: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    removeLogo: Optional[str] = Form(None),
    logoImage: Optional[UploadFile] = File(None),
    job_service: JobService = Depends(get_job_service),
):
    fields = dict(title=title, company=company, location=location, type=type, salary=salary,
                  category=category, description=description, skills=skills, rating=rating)
    logo = await read_upload(logoImage)
    return await run_in_threadpool(job_service.update_job, job_id, fields, logo, remove_logo=as_bool(removeLogo))


@router.delete("/jobs/{job_id}")
def delete_job(job_id: str, job_service: JobService = Depends(get_job_service)):
    return job_service.delete_job(job_id)
