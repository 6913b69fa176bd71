"""Admin membership endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from app.crud.base import StoreContext
from app.crud.messages import AdminRepository
from app.dependencies import get_optional_user, get_store
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


class GrantRequest(BaseModel):
    uid: str = Field(min_length=1, description="Firebase Auth uid to grant admin access")


@router.get("", response_model=ApiResponse)
async def list_admins(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    admins = AdminRepository(store).list(user)
    return ApiResponse.ok(ListData.of(admins), "Admins retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def grant_admin(
    request: GrantRequest,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = AdminRepository(store).grant(request.uid, user)
    data = WriteData.from_result(result)
    logger.info(f"Admin access granted to {request.uid.strip()} by {user.uid}")
    return ApiResponse.ok(data, "Admin access granted.")


@router.delete("/{uid}", response_model=ApiResponse)
async def revoke_admin(
    uid: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = AdminRepository(store).revoke(uid, user)
    data = WriteData.from_result(result)
    logger.info(f"Admin access revoked from {uid} by {user.uid}")
    return ApiResponse.ok(data, "Admin access revoked.")
