# silver_talent/services/subscription_service.py
import logging
from typing import Any, Dict

from fastapi import HTTPException
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from silver_talent.database.mongodb import MongoDB, parse_object_id, serialize_doc, utcnow
from silver_talent.models.subscription import SUBSCRIPTION_EMAIL_PATTERN, SubscriptionPayload
from silver_talent.services.listing import ListingQuery, paginate, parse_page_params
from silver_talent.services.validation import clean, matches

logger = logging.getLogger(__name__)


def normalize_email(payload: SubscriptionPayload) -> str:
    email = clean(payload.email)
    if not email:
        raise HTTPException(status_code=400, detail="Email is required.")
    email = email.lower()
    if not matches(SUBSCRIPTION_EMAIL_PATTERN, email):
        raise HTTPException(status_code=400, detail={"message": "Validation Error",
                                                     "errors": {"email": "Please provide a valid email address"}})
    return email


class SubscriptionService:
    def __init__(self, db: MongoDB):
        self.db = db

    def subscribe(self, payload: SubscriptionPayload) -> Dict:
        email = normalize_email(payload)
        if self.db.subscriptions.find_one({"email": email}, {"_id": 1}):
            raise HTTPException(status_code=409, detail=f"{email} is already subscribed.")
        now = utcnow()
        try:
            result = self.db.subscriptions.insert_one({"email": email, "createdAt": now, "updatedAt": now})
        except DuplicateKeyError:
            raise HTTPException(status_code=409, detail=f"{email} is already subscribed.")
        logger.info(f"New job alert subscription in DB: {email}")
        return {"message": f"Successfully subscribed {email} for job alerts!", "id": str(result.inserted_id)}

    def get_all(self, page: Any = 1, limit: Any = 50) -> Dict:
        effective_page, effective_limit = parse_page_params(page, limit, default_limit=50)
        listing = ListingQuery(sort=[("createdAt", -1), ("_id", -1)], page=effective_page, limit=effective_limit)
        return paginate(self.db.subscriptions, listing, "subscriptions")

    def get(self, subscription_id: str) -> Dict:
        return serialize_doc(self.db.get_by_id(self.db.subscriptions, subscription_id, "Subscription"))

    def update(self, subscription_id: str, payload: SubscriptionPayload) -> Dict:
        email = normalize_email(payload)
        subscription_oid = parse_object_id(subscription_id, "Subscription")
        if self.db.subscriptions.find_one({"email": email, "_id": {"$ne": subscription_oid}}, {"_id": 1}):
            raise HTTPException(status_code=409, detail=f"{email} is already subscribed.")
        try:
            subscription = self.db.subscriptions.find_one_and_update(
                {"_id": subscription_oid},
                {"$set": {"email": email, "updatedAt": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise HTTPException(status_code=409, detail=f"{email} is already subscribed.")
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found.")
        return {"message": "Subscription updated.", "subscription": serialize_doc(subscription)}

    def delete(self, subscription_id: str) -> Dict:
        result = self.db.subscriptions.delete_one({"_id": parse_object_id(subscription_id, "Subscription")})
        if not result.deleted_count:
            raise HTTPException(status_code=404, detail="Subscription not found.")
        logger.info(f"Subscription {subscription_id} removed")
        return {"message": "Subscription removed.", "subscriptionId": subscription_id}
