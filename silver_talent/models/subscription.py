# silver_talent/models/subscription.py
from pydantic import BaseModel
from typing import Optional

SUBSCRIPTION_EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

class SubscriptionPayload(BaseModel):
    email: Optional[str] = None
