"""
Billing domain models and schemas.

Dependencies: pydantic
System role: Billing API contracts
"""

from datetime import datetime

from docchat.models.common import RPCModel


class StripeSessionResponse(RPCModel):
    """URL of a hosted billing page (portal or checkout)."""

    url: str


class SubscriptionPlanResponse(RPCModel):
    """The caller's effective plan and subscription state."""

    name: str
    slug: str
    quota: int
    pages_per_pdf: int
    price_amount: int
    is_subscribed: bool
    is_canceled: bool
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None
    stripe_current_period_end: datetime | None = None
