"""Main v1 API router that aggregates all sub-routers."""

from fastapi import APIRouter

from .admin import router as admin_router
from .admins import router as admins_router
from .ai import router as ai_router
from .auth import router as auth_router
from .conditions import router as conditions_router
from .contact import router as contact_router
from .diagnostics import router as diagnostics_router
from .feedback import router as feedback_router
from .guides import router as guides_router
from .live import router as live_router
from .plans import router as plans_router
from .products import router as products_router
from .social_links import router as social_links_router
from .subscriptions import router as subscriptions_router
from .therapists import bookings_router, router as therapists_router

# Main v1 router
router = APIRouter(prefix="/api/v1")

# Include all sub-routers with appropriate prefixes
router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(conditions_router, prefix="/conditions", tags=["Conditions"])
router.include_router(guides_router, prefix="/guides", tags=["Guides"])
router.include_router(therapists_router, prefix="/therapists", tags=["Therapists"])
router.include_router(bookings_router, prefix="/bookings", tags=["Bookings"])
router.include_router(products_router, prefix="/products", tags=["Store"])
router.include_router(plans_router, prefix="/plans", tags=["Plans"])
router.include_router(subscriptions_router, prefix="/subscriptions", tags=["Subscriptions"])
router.include_router(admins_router, prefix="/admins", tags=["Admins"])
router.include_router(contact_router, prefix="/contact", tags=["Contact"])
router.include_router(feedback_router, prefix="/feedback", tags=["Feedback"])
router.include_router(social_links_router, prefix="/social-links", tags=["Social Links"])
router.include_router(ai_router, prefix="/ai", tags=["AI"])
router.include_router(diagnostics_router, prefix="/diagnostics", tags=["Diagnostics"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
router.include_router(live_router, prefix="/live", tags=["Live"])

__all__ = ["router"]
