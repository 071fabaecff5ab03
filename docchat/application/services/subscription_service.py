"""
Subscription service.

Derives a user's effective plan from the Stripe state stored on the user
row, asking the provider only whether an active subscription is canceled.

Dependencies: docchat.boundary.billing, docchat.configs
System role: Subscription plan resolution
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from docchat.boundary.billing.payment_provider import PaymentProvider
from docchat.boundary.db.models.user_model import UserModel
from docchat.configs.billing import Plan

# Grace period after the paid period ends before access lapses
SUBSCRIPTION_GRACE = timedelta(days=1)


@dataclass
class SubscriptionPlan:
    """Effective plan for a user."""

    plan: Plan
    is_subscribed: bool
    is_canceled: bool
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None
    stripe_current_period_end: datetime | None = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SubscriptionService:
    """Resolves the subscription plan of a user."""

    def __init__(self, payments: PaymentProvider, plans: list[Plan]) -> None:
        """
        Initialize subscription service.

        Args:
            payments: Payment provider for cancellation lookups
            plans: Plan catalogue, free plan first
        """
        self.payments = payments
        self.plans = plans

    @property
    def free_plan(self) -> Plan:
        """Plan used when the user has no active subscription."""
        return self.plans[0]

    def is_subscribed(self, user: UserModel, now: datetime | None = None) -> bool:
        """
        Check whether the user's paid period (plus one day) is still running.

        Args:
            user: User row
            now: Current time (defaults to UTC now)

        Returns:
            bool: True if a price id and an unexpired period end are on file
        """
        if not user.stripe_price_id or user.stripe_current_period_end is None:
            return False
        now = now or datetime.now(timezone.utc)
        return _as_utc(user.stripe_current_period_end) + SUBSCRIPTION_GRACE > now

    async def get_user_subscription_plan(self, user: UserModel) -> SubscriptionPlan:
        """
        Resolve the user's plan.

        Args:
            user: User row

        Returns:
            SubscriptionPlan: Matching paid plan when subscribed, free plan otherwise

        Raises:
            Exception: Provider errors from the cancellation lookup propagate
        """
        is_subscribed = self.is_subscribed(user)

        plan = self.free_plan
        if is_subscribed:
            plan = next(
                (p for p in self.plans if p.has_price_id(user.stripe_price_id)),
                self.free_plan,
            )

        is_canceled = False
        if is_subscribed and user.stripe_subscription_id:
            subscription = await self.payments.retrieve_subscription(user.stripe_subscription_id)
            is_canceled = subscription.cancel_at_period_end

        return SubscriptionPlan(
            plan=plan,
            is_subscribed=is_subscribed,
            is_canceled=is_canceled,
            stripe_customer_id=user.stripe_customer_id,
            stripe_subscription_id=user.stripe_subscription_id,
            stripe_current_period_end=user.stripe_current_period_end,
        )
