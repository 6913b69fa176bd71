"""Social media link endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.catalog import SocialLinkRepository
from app.dependencies import get_optional_user, get_store
from app.models.catalog import SocialLink
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext

router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_social_links(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    links = SocialLinkRepository(store).list(user)
    return ApiResponse.ok(ListData.of(links), "Social links retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_social_link(
    link: SocialLink,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """
    Add a link for a platform.

    Raises:
        DuplicatePlatformError: If the platform already has a link
    """
    result = SocialLinkRepository(store).create(link, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{link.platform} link has been added.")


@router.delete("/{link_id}", response_model=ApiResponse)
async def delete_social_link(
    link_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = SocialLinkRepository(store).delete(link_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Social link deleted.")
