"""Condition catalog endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.catalog import ConditionRepository, GuideRepository
from app.dependencies import get_optional_user, get_store
from app.models.catalog import Condition
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.exceptions import NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_conditions(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """All conditions, in store order."""
    conditions = ConditionRepository(store).list(user)
    return ApiResponse.ok(ListData.of(conditions), "Conditions retrieved successfully")


@router.get("/by-slug/{slug}", response_model=ApiResponse)
async def get_condition_by_slug(
    slug: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """
    A condition and its related treatment guides.

    Raises:
        NotFoundError: If no condition has this slug
    """
    condition = ConditionRepository(store).get_by_slug(slug, user)
    if condition is None:
        raise NotFoundError(f"Condition not found: {slug}")

    guides = GuideRepository(store).related_to(condition, user)
    data = condition.to_response()
    data["relatedGuides"] = [guide.to_response() for guide in guides]
    return ApiResponse.ok(data, "Condition retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_condition(
    condition: Condition,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Add a condition. Slugs are not checked for uniqueness."""
    result = ConditionRepository(store).create(condition, user)
    data = WriteData.from_result(result)
    logger.info(f"Condition added: {condition.name} ({data.id})")
    return ApiResponse.ok(data, f"{condition.name} has been added.")


@router.delete("/{condition_id}", response_model=ApiResponse)
async def delete_condition(
    condition_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = ConditionRepository(store).delete(condition_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Condition deleted.")
