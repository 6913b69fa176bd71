"""Admin maintenance endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_write_pipeline, require_admin
from app.schemas.responses import ApiResponse
from app.services.seed import seed_example_data
from app.store.policy import AuthContext
from app.store.writes import WritePipeline
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.post("/seed", response_model=ApiResponse)
async def seed(
    writes: WritePipeline = Depends(get_write_pipeline),
    admin: AuthContext = Depends(require_admin),
) -> ApiResponse:
    """
    Write the example treatment guides and conditions.

    Existing documents with the same ids are overwritten. Individual
    failures are reported on the error bus and counted, not raised.
    """
    counts = seed_example_data(writes, admin)
    logger.info(f"Example data seeded by {admin.uid}: {counts['successCount']}/{counts['totalDocs']}")
    return ApiResponse.ok(
        counts,
        f"Successfully added {counts['successCount']} of {counts['totalDocs']} documents.",
    )
