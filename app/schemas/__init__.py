"""
PhysioCare Schemas
Response envelopes shared by the API routers.
"""

from app.schemas.responses import ApiResponse, ListData, WriteData

__all__ = [
    "ApiResponse",
    "ListData",
    "WriteData",
]
