"""Treatment guide endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.catalog import GuideRepository
from app.dependencies import get_optional_user, get_store
from app.models.catalog import TreatmentGuide
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.exceptions import NotFoundError

router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_guides(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    guides = GuideRepository(store).list(user)
    return ApiResponse.ok(ListData.of(guides), "Guides retrieved successfully")


@router.get("/by-slug/{slug}", response_model=ApiResponse)
async def get_guide_by_slug(
    slug: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    guide = GuideRepository(store).get_by_slug(slug, user)
    if guide is None:
        raise NotFoundError(f"Guide not found: {slug}")
    return ApiResponse.ok(guide.to_response(), "Guide retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_guide(
    guide: TreatmentGuide,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = GuideRepository(store).create(guide, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{guide.title} has been added.")


@router.delete("/{guide_id}", response_model=ApiResponse)
async def delete_guide(
    guide_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = GuideRepository(store).delete(guide_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Guide deleted.")
