# silver_talent/config.py
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    # Database
    MONGODB_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017')
    DATABASE_NAME = os.getenv('DATABASE_NAME', "silver_talent")

    # Collections
    JOBS_COLLECTION = "jobs"
    APPLICATIONS_COLLECTION = "applications"
    BLOG_POSTS_COLLECTION = "blog_posts"
    BLOG_CATEGORIES_COLLECTION = "blog_categories"
    CONTACT_SUBMISSIONS_COLLECTION = "contact_submissions"
    CONTACT_INFO_COLLECTION = "contact_info"
    SUBSCRIPTIONS_COLLECTION = "subscriptions"

    # Media store (all three are required, the app refuses to start without them)
    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME', '')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY', '')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET', '')

    RESUMES_FOLDER = "silver_talent/resumes"
    COMPANY_LOGOS_FOLDER = "silver_talent/company_logos"
    BLOG_IMAGES_FOLDER = "silver_talent/blog_images"

    # Contact mail transport (missing values disable mail, they are not fatal)
    EMAIL_SERVER_HOST = os.getenv('EMAIL_SERVER_HOST', '')
    EMAIL_SERVER_PORT = os.getenv('EMAIL_SERVER_PORT', '')
    EMAIL_SERVER_USER = os.getenv('EMAIL_SERVER_USER', '')
    EMAIL_SERVER_PASSWORD = os.getenv('EMAIL_SERVER_PASSWORD', '')
    EMAIL_TO = os.getenv('EMAIL_TO', '')

    # Job-application mail transport (separate credential pair)
    EMAIL_USER = os.getenv('EMAIL_USER', '')
    EMAIL_PASS = os.getenv('EMAIL_PASS', '')
    OWNER_EMAIL = os.getenv('OWNER_EMAIL', '')
    APPLICATION_SMTP_HOST = os.getenv('APPLICATION_SMTP_HOST', "smtp.gmail.com")
    APPLICATION_SMTP_PORT = os.getenv('APPLICATION_SMTP_PORT', "465")

    COMPANY_NAME = os.getenv('COMPANY_NAME', "Silver Talent")

    # Listing
    DEFAULT_PAGE_LIMIT = 10
    ADMIN_PAGE_LIMIT = 200

    # Resume uploads
    MAX_RESUME_SIZE_MB = 5
    ALLOWED_RESUME_TYPES = (
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )

    # Contact info singleton
    CONTACT_INFO_IDENTIFIER = "main_contact_info"
    CONTACT_INFO_DEFAULTS = {
        "address": "123 Main Street, Anytown, USA 12345",
        "phone": "+1 (555) 123-4567",
        "email": "contact@silvertalent.com",
        "locationMapUrl": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3022.617235807076!2d-73.98785368459393!3d40.74844097932817",
    }

    # Other flags
    CORS_ORIGIN = os.getenv('CORS_ORIGIN', "*")
    LOG_LEVEL = os.getenv('LOG_LEVEL', "INFO").upper()

    @classmethod
    def missing_media_credentials(cls):
        required = {
            "CLOUDINARY_CLOUD_NAME": cls.CLOUDINARY_CLOUD_NAME,
            "CLOUDINARY_API_KEY": cls.CLOUDINARY_API_KEY,
            "CLOUDINARY_API_SECRET": cls.CLOUDINARY_API_SECRET,
        }
        return [name for name, value in required.items() if not value]
