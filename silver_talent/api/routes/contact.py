# silver_talent/api/routes/contact.py
from fastapi import APIRouter, BackgroundTasks, Depends
from typing import Optional

from silver_talent.dependencies import get_contact_service
from silver_talent.models.contact import ContactForm, ContactInfoUpdate, SubmissionResponse, SubmissionStatusUpdate
from silver_talent.services.contact_service import ContactService

router = APIRouter()


@router.get("/contact-info")
def get_contact_info(contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.get_contact_info()


@router.put("/contact-info")
def update_contact_info(payload: ContactInfoUpdate,
                              contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.update_contact_info(payload)


@router.post("/contact-us")
def handle_public_contact_form(form: ContactForm, background_tasks: BackgroundTasks,
                                     contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.submit_contact_form(form, background_tasks)


# Admin routes for managing contact submissions

@router.get("/contact-submissions")
def get_contact_submissions(
    status_filter: Optional[str] = None,
    page: Optional[str] = "1",
    limit: Optional[str] = "50",
    contact_service: ContactService = Depends(get_contact_service),
):
    return contact_service.get_submissions(status_filter, page, limit)


@router.put("/contact-submissions/{submission_id}/status")
def update_submission_status(submission_id: str, payload: SubmissionStatusUpdate,
                                   contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.update_status(submission_id, payload)


@router.post("/contact-submissions/{submission_id}/respond")
def respond_to_submission(submission_id: str, payload: SubmissionResponse,
                                contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.respond(submission_id, payload)


@router.delete("/contact-submissions/{submission_id}")
def delete_submission(submission_id: str, contact_service: ContactService = Depends(get_contact_service)):
    return contact_service.delete_submission(submission_id)
