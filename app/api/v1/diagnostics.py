"""Permission error diagnostics for administrators."""

from fastapi import APIRouter, Depends

from app.dependencies import get_diagnostics_log, require_admin
from app.schemas.responses import ApiResponse, ListData
from app.store.events import DiagnosticsLog
from app.store.policy import AuthContext

router = APIRouter()


@router.get("/permission-errors", response_model=ApiResponse)
async def recent_permission_errors(
    diagnostics: DiagnosticsLog = Depends(get_diagnostics_log),
    _admin: AuthContext = Depends(require_admin),
) -> ApiResponse:
    """Recent rejected reads and writes, newest first."""
    return ApiResponse.ok(ListData.of(diagnostics.records()), "Permission errors retrieved")


@router.delete("/permission-errors", response_model=ApiResponse)
async def clear_permission_errors(
    diagnostics: DiagnosticsLog = Depends(get_diagnostics_log),
    _admin: AuthContext = Depends(require_admin),
) -> ApiResponse:
    diagnostics.clear()
    return ApiResponse.ok(None, "Permission errors cleared")
