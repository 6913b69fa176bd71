"""Contact form and clinic contact information endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.catalog import ContactInformationRepository
from app.crud.messages import ContactSubmissionRepository
from app.dependencies import get_optional_user, get_store
from app.models.catalog import ContactInformation
from app.models.messages import ContactSubmission
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext

router = APIRouter()


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    submission: ContactSubmission,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Anyone may send a message; it is stamped with the server time."""
    result = ContactSubmissionRepository(store).submit(submission, user)
    return ApiResponse.ok(
        WriteData.from_result(result),
        "Thank you for contacting us. We will get back to you shortly.",
    )


@router.get("/submissions", response_model=ApiResponse)
async def list_submissions(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    submissions = ContactSubmissionRepository(store).newest_first(user)
    return ApiResponse.ok(ListData.of(submissions), "Submissions retrieved successfully")


@router.delete("/submissions/{submission_id}", response_model=ApiResponse)
async def delete_submission(
    submission_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = ContactSubmissionRepository(store).delete(submission_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Submission deleted.")


@router.get("/info", response_model=ApiResponse)
async def get_contact_information(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """The clinic's contact details; empty fields until an admin saves them."""
    info = ContactInformationRepository(store).get_main(user) or ContactInformation()
    return ApiResponse.ok(info.to_response(), "Contact information retrieved")


@router.put("/info", response_model=ApiResponse)
async def save_contact_information(
    info: ContactInformation,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = ContactInformationRepository(store).save_main(info, user)
    return ApiResponse.ok(WriteData.from_result(result), "Contact information saved.")
