"""Subscription plan endpoints."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from app.crud.base import StoreContext
from app.crud.subscriptions import PlanRepository
from app.dependencies import get_optional_user, get_store
from app.models.subscription import SubscriptionPlan, split_features
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext

router = APIRouter()


class PlanPatch(BaseModel):
    """Fields of a plan to change; omitted fields are kept."""
    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=10)
    price: Optional[float] = Field(default=None, ge=0)
    duration_in_days: Optional[int] = Field(default=None, gt=0, alias="durationInDays")
    features: Optional[Union[List[str], str]] = None
    is_featured: Optional[bool] = Field(default=None, alias="isFeatured")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    content: Optional[str] = None

    model_config = {"populate_by_name": True}

    def to_fields(self) -> dict:
        fields = self.model_dump(by_alias=True, exclude_none=True)
        if isinstance(fields.get("features"), str):
            fields["features"] = split_features(fields["features"])
        return fields


@router.get("", response_model=ApiResponse)
async def list_plans(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Plans with featured ones first, then by price."""
    plans = PlanRepository(store).featured_first(user)
    return ApiResponse.ok(ListData.of(plans), "Plans retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan: SubscriptionPlan,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = PlanRepository(store).create(plan, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{plan.name} has been added.")


@router.patch("/{plan_id}", response_model=ApiResponse)
async def update_plan(
    plan_id: str,
    patch: PlanPatch,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = PlanRepository(store).merge(plan_id, patch.to_fields(), user)
    return ApiResponse.ok(WriteData.from_result(result), "Plan updated.")


@router.delete("/{plan_id}", response_model=ApiResponse)
async def delete_plan(
    plan_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = PlanRepository(store).delete(plan_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Plan deleted.")
