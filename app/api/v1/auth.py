"""Authentication endpoints: current user, provider error messages, dev tokens."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from app.dependencies import _check_local_mode, get_current_user, local_issue_token
from app.schemas.responses import ApiResponse
from app.services.firebase.auth_service import describe_auth_error
from app.store.policy import AuthContext
from app.utils.exceptions import NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


class DescribeErrorRequest(BaseModel):
    """Request model for translating a provider error code."""
    code: Optional[str] = None


class DevTokenRequest(BaseModel):
    """Request model for a local development token."""
    uid: str = Field(..., min_length=1)
    email: Optional[str] = None
    name: Optional[str] = None


@router.get("/me", response_model=ApiResponse)
async def me(user: AuthContext = Depends(get_current_user)) -> ApiResponse:
    """The signed-in user and whether they hold admin capability."""
    return ApiResponse.ok(
        {
            "uid": user.uid,
            "email": user.email,
            "displayName": user.display_name,
            "isAdmin": user.is_admin,
        },
        "User retrieved successfully",
    )


@router.post("/describe-error", response_model=ApiResponse)
async def describe_error(request: DescribeErrorRequest) -> ApiResponse:
    """Map an authentication provider error code to a user-facing message."""
    return ApiResponse.ok(
        {"code": request.code, "message": describe_auth_error(request.code)},
        "Error described",
    )


@router.post("/dev-token", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def dev_token(request: DevTokenRequest) -> ApiResponse:
    """
    Issue a bearer token without Firebase.

    Only available in local development mode.
    """
    if not _check_local_mode():
        raise NotFoundError("Dev tokens are only available in local mode")

    token = local_issue_token(request.uid, email=request.email, name=request.name)
    logger.info(f"Issued local dev token for {request.uid}")
    return ApiResponse.ok({"token": token, "uid": request.uid}, "Token issued")
