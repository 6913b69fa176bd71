"""Patient feedback endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.messages import FeedbackRepository
from app.dependencies import get_optional_user, get_store
from app.models.messages import Feedback
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    feedback: Feedback,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Submit a rating; signed-in users are credited by name."""
    result = FeedbackRepository(store).submit(feedback, user)
    data = WriteData.from_result(result)
    logger.info(f"Feedback received: rating={feedback.rating} user={user.uid or 'anonymous'}")
    return ApiResponse.ok(data, "Thank you for your feedback!")


@router.get("", response_model=ApiResponse)
async def list_feedback(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    items = FeedbackRepository(store).newest_first(user)
    return ApiResponse.ok(ListData.of(items), "Feedback retrieved successfully")


@router.delete("/{feedback_id}", response_model=ApiResponse)
async def delete_feedback(
    feedback_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = FeedbackRepository(store).delete(feedback_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Feedback deleted.")
