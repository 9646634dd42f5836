# silver_talent/dependencies.py
from functools import lru_cache

from fastapi import Depends

from silver_talent.config import Config
from silver_talent.database.mongodb import MongoDB
from silver_talent.services.application_service import ApplicationService
from silver_talent.services.blog_service import BlogService
from silver_talent.services.contact_service import ContactService
from silver_talent.services.job_service import JobService
from silver_talent.services.media import MediaStore
from silver_talent.services.notifier import build_notifier
from silver_talent.services.subscription_service import SubscriptionService


@lru_cache
def get_db() -> MongoDB:
    return MongoDB()


@lru_cache
def get_media_store() -> MediaStore:
    return MediaStore.from_config()


@lru_cache
def get_notifier():
    """Contact-form mail transport"""
    return build_notifier(
        Config.EMAIL_SERVER_HOST,
        Config.EMAIL_SERVER_PORT,
        Config.EMAIL_SERVER_USER,
        Config.EMAIL_SERVER_PASSWORD,
        default_recipient=Config.EMAIL_TO,
        name="contact mail",
    )


@lru_cache
def get_application_notifier():
    """Job-application mail transport (separate credentials, OWNER_EMAIL is optional)"""
    return build_notifier(
        Config.APPLICATION_SMTP_HOST,
        Config.APPLICATION_SMTP_PORT,
        Config.EMAIL_USER,
        Config.EMAIL_PASS,
        default_recipient=Config.OWNER_EMAIL or None,
        name="application mail",
        require_recipient=False,
    )


def get_job_service(db: MongoDB = Depends(get_db), media_store=Depends(get_media_store)) -> JobService:
    return JobService(db, media_store)


def get_application_service(db: MongoDB = Depends(get_db), media_store=Depends(get_media_store),
                            notifier=Depends(get_application_notifier)) -> ApplicationService:
    return ApplicationService(db, media_store, notifier)


def get_blog_service(db: MongoDB = Depends(get_db), media_store=Depends(get_media_store)) -> BlogService:
    return BlogService(db, media_store)


def get_contact_service(db: MongoDB = Depends(get_db), notifier=Depends(get_notifier)) -> ContactService:
    return ContactService(db, notifier)


def get_subscription_service(db: MongoDB = Depends(get_db)) -> SubscriptionService:
    return SubscriptionService(db)
