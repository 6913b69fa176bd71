"""Subscription checkout and management endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.crud.base import StoreContext
from app.crud.subscriptions import (
    AllSubscriptionsRepository,
    PlanRepository,
    UserSubscriptionRepository,
    subscription_view,
)
from app.dependencies import get_current_user, get_optional_user, get_store
from app.models.subscription import SubscriptionStatus
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.exceptions import NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


class StatusRequest(BaseModel):
    status: SubscriptionStatus


@router.get("/me", response_model=ApiResponse)
async def my_subscriptions(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
) -> ApiResponse:
    """
    The caller's subscription history, newest first.

    ``current`` is the newest subscription that is still active once
    cancellation and expiry are taken into account.
    """
    repo = UserSubscriptionRepository(store, user.uid)
    history = repo.history(user)
    current = repo.current(user)
    return ApiResponse.ok(
        {
            "current": subscription_view(current) if current else None,
            "history": [subscription_view(sub) for sub in history],
        },
        "Subscriptions retrieved successfully",
    )


@router.post("/checkout/{plan_id}", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    plan_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
) -> ApiResponse:
    """
    Start a subscription to a plan.

    Payment is simulated; the subscription is active immediately and ends
    after the plan's duration.
    """
    plan = PlanRepository(store).get(plan_id, user)
    if plan is None:
        raise NotFoundError(f"Plan not found: {plan_id}")

    result = UserSubscriptionRepository(store, user.uid).subscribe(plan, user)
    data = WriteData.from_result(result)
    logger.info(f"User {user.uid} subscribed to {plan.name}")
    return ApiResponse.ok(data, f"You have subscribed to the {plan.name} plan.")


@router.get("", response_model=ApiResponse)
async def list_all_subscriptions(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Every user's subscriptions (collection group query), newest first."""
    subs = AllSubscriptionsRepository(store).newest_first(user)
    items = [subscription_view(sub) for sub in subs]
    return ApiResponse.ok(ListData.of(items), "Subscriptions retrieved successfully")


@router.patch("/{user_id}/{subscription_id}", response_model=ApiResponse)
async def set_subscription_status(
    user_id: str,
    subscription_id: str,
    request: StatusRequest,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = UserSubscriptionRepository(store, user_id).set_status(subscription_id, request.status, user)
    return ApiResponse.ok(WriteData.from_result(result), f"Subscription is now {request.status.value}.")
