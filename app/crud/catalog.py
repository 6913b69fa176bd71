"""
Catalog Repositories
Conditions, guides, therapists, products, social links, contact info.
"""

from typing import List, Optional

from app.crud.base import BaseRepository
from app.models.catalog import (
    Condition,
    ContactInformation,
    Product,
    SocialLink,
    Therapist,
    TreatmentGuide,
)
from app.store.policy import AuthContext
from app.store.writes import WriteResult
from app.utils.exceptions import DuplicatePlatformError


class SlugLookupMixin:
    """Lookup by slug. Slugs are not unique; the first match wins."""

    def get_by_slug(self, slug: str, auth: AuthContext):
        matches = self.find_by("slug", slug, auth)
        return matches[0] if matches else None


class ConditionRepository(SlugLookupMixin, BaseRepository[Condition]):
    model = Condition
    collection_path = "conditions"


class GuideRepository(SlugLookupMixin, BaseRepository[TreatmentGuide]):
    model = TreatmentGuide
    collection_path = "treatmentGuides"

    def related_to(self, condition: Condition, auth: AuthContext) -> List[TreatmentGuide]:
        """Guides named by a condition's related slugs, in the condition's order."""
        if not condition.related_guide_slugs:
            return []
        by_slug = {}
        for guide in self.list(auth, self.query().where("slug", "in", condition.related_guide_slugs)):
            by_slug.setdefault(guide.slug, guide)
        return [by_slug[slug] for slug in condition.related_guide_slugs if slug in by_slug]


class TherapistRepository(BaseRepository[Therapist]):
    model = Therapist
    collection_path = "therapists"


class ProductRepository(BaseRepository[Product]):
    model = Product
    collection_path = "products"


class SocialLinkRepository(BaseRepository[SocialLink]):
    model = SocialLink
    collection_path = "socialLinks"

    def create(self, item: SocialLink, auth: AuthContext, extra=None) -> WriteResult:
        """Add a link, refusing a second one for the same platform."""
        if self.find_by("platform", item.platform, auth):
            raise DuplicatePlatformError(item.platform)
        return super().create(item, auth, extra)


class ContactInformationRepository(BaseRepository[ContactInformation]):
    model = ContactInformation
    collection_path = "contactInformation"

    MAIN = "main"

    def get_main(self, auth: AuthContext) -> Optional[ContactInformation]:
        return self.get(self.MAIN, auth)

    def save_main(self, info: ContactInformation, auth: AuthContext) -> WriteResult:
        """Merge the fields that were sent; others keep their stored values."""
        fields = info.model_dump(by_alias=True, exclude_unset=True, exclude={"id"})
        return self.merge(self.MAIN, fields, auth)
