"""
Subscription Repositories
Plans and the per-user subscriptions sub-collection.
"""

from typing import Any, Dict, List, Optional

from app.crud.base import BaseRepository, StoreContext
from app.models.subscription import (
    LifecycleStatus,
    SubscriptionPlan,
    SubscriptionStatus,
    UserSubscription,
    as_aware,
    derive_status,
    format_end_date,
)
from app.store.policy import AuthContext
from app.store.queries import DESCENDING, QueryDescriptor
from app.store.writes import WriteResult

SUBSCRIPTIONS_GROUP = "subscriptions"


def subscription_view(sub: UserSubscription) -> Dict[str, Any]:
    """A subscription as returned to clients, with its derived status."""
    data = sub.to_response()
    data["lifecycleStatus"] = derive_status(sub).value
    data["endDateDisplay"] = format_end_date(sub)
    return data


class PlanRepository(BaseRepository[SubscriptionPlan]):
    model = SubscriptionPlan
    collection_path = "subscriptionPlans"

    def featured_first(self, auth: AuthContext) -> List[SubscriptionPlan]:
        plans = self.list(auth)
        return sorted(plans, key=lambda plan: (not plan.is_featured, plan.price))


class UserSubscriptionRepository(BaseRepository[UserSubscription]):
    """``users/{uid}/subscriptions``"""

    model = UserSubscription

    def __init__(self, store: StoreContext, user_id: str):
        super().__init__(store)
        self.user_id = user_id
        self.collection_path = f"users/{user_id}/subscriptions"

    def history(self, auth: AuthContext) -> List[UserSubscription]:
        """Newest first."""
        return self.list(auth, self.query().order_by("startDate", DESCENDING))

    def current(self, auth: AuthContext) -> Optional[UserSubscription]:
        """The newest subscription whose derived status is active."""
        for sub in self.history(auth):
            if derive_status(sub) == LifecycleStatus.ACTIVE:
                return sub
        return None

    def subscribe(self, plan: SubscriptionPlan, auth: AuthContext) -> WriteResult:
        sub = UserSubscription.start(plan, user_id=self.user_id, user_email=auth.email)
        return self.create(sub, auth)

    def set_status(self, subscription_id: str, status: SubscriptionStatus, auth: AuthContext) -> WriteResult:
        return self.update(subscription_id, {"status": SubscriptionStatus(status).value}, auth)


class AllSubscriptionsRepository(BaseRepository[UserSubscription]):
    """Collection-group view across every user's subscriptions (admin only)."""

    model = UserSubscription
    collection_path = SUBSCRIPTIONS_GROUP

    def query(self) -> QueryDescriptor:
        return QueryDescriptor.collection_group(SUBSCRIPTIONS_GROUP)

    def newest_first(self, auth: AuthContext) -> List[UserSubscription]:
        """By ``startDate`` descending; subscriptions without one come last."""
        subs = self.list(auth)
        dated = [sub for sub in subs if sub.start_date is not None]
        undated = [sub for sub in subs if sub.start_date is None]
        dated.sort(key=lambda sub: as_aware(sub.start_date), reverse=True)
        return dated + undated
