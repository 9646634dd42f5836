# silver_talent/api/routes/subscriptions.py
from fastapi import APIRouter, Depends
from typing import Optional

from silver_talent.dependencies import get_subscription_service
from silver_talent.models.subscription import SubscriptionPayload
from silver_talent.services.subscription_service import SubscriptionService

router = APIRouter()


@router.post("/subscribe")
def subscribe_to_alerts(payload: SubscriptionPayload,
                              subscription_service: SubscriptionService = Depends(get_subscription_service)):
    return subscription_service.subscribe(payload)


@router.get("/subscriptions")
def get_subscriptions(page: Optional[str] = "1", limit: Optional[str] = "50",
                            subscription_service: SubscriptionService = Depends(get_subscription_service)):
    return subscription_service.get_all(page, limit)


@router.get("/subscriptions/{subscription_id}")
def get_subscription(subscription_id: str,
                           subscription_service: SubscriptionService = Depends(get_subscription_service)):
    return subscription_service.get(subscription_id)


@router.put("/subscriptions/{subscription_id}")
def update_subscription(subscription_id: str, payload: SubscriptionPayload,
                              subscription_service: SubscriptionService = Depends(get_subscription_service)):
    return subscription_service.update(subscription_id, payload)


@router.delete("/subscriptions/{subscription_id}")
def delete_subscription(subscription_id: str,
                              subscription_service: SubscriptionService = Depends(get_subscription_service)):
    return subscription_service.delete(subscription_id)
