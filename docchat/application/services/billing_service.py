"""
Billing service orchestrator.

Turns local subscription state into a hosted payment page: the billing
portal for subscribers with a customer on file, checkout for everyone else.

Collaborator failures are logged and re-raised as INTERNAL_SERVER_ERROR with
a fixed message, so provider error details never reach the caller.

Dependencies: docchat.boundary.billing, docchat.boundary.db.CRUD, docchat.configs
System role: Billing reconciliation adapter
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services.subscription_service import SubscriptionService
from docchat.boundary.billing.payment_provider import PaymentProvider
from docchat.boundary.db.CRUD.user_crud import user_crud
from docchat.configs import Settings
from docchat.core.exceptions import ErrorCode, PaymentProviderError, RPCError
from docchat.models.billing import StripeSessionResponse, SubscriptionPlanResponse
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CHECKOUT_PLAN_NAME = "Pro"


class BillingService:
    """Billing service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        payments: PaymentProvider,
        settings: Settings,
        subscriptions: SubscriptionService | None = None,
    ) -> None:
        """
        Initialize billing service.

        Args:
            db: Async SQLAlchemy session
            payments: Payment provider
            settings: Application settings (plans, app URL, environment)
            subscriptions: Optional SubscriptionService (built from settings if None)
        """
        self.db = db
        self.payments = payments
        self.settings = settings
        self.subscriptions = subscriptions or SubscriptionService(
            payments, settings.billing.plans
        )

    @property
    def billing_url(self) -> str:
        """Web app billing page, used as every provider return URL."""
        return self.settings.absolute_url(self.settings.billing.billing_path)

    async def create_stripe_session(self, user_id: str | None) -> StripeSessionResponse:
        """
        Create a billing portal or checkout session for the user.

        Args:
            user_id: Caller's user id

        Returns:
            StripeSessionResponse: Hosted page URL

        Raises:
            RPCError(UNAUTHORIZED): If user_id is missing or has no user row
            RPCError(INTERNAL_SERVER_ERROR): If the database, plan lookup,
                or payment provider fails
        """
        if not user_id:
            logger.warning("Billing session requested without user id")
            raise RPCError(ErrorCode.UNAUTHORIZED)

        try:
            user = await user_crud.get_by_id(self.db, user_id)
        except Exception as e:
            log_exception_with_context(logger, "Error finding user in database", e, user_id=user_id)
            raise RPCError(
                ErrorCode.INTERNAL_SERVER_ERROR, "Error finding user in database"
            ) from e

        if user is None:
            logger.warning("Billing session requested for unknown user", extra={"user_id": user_id})
            raise RPCError(ErrorCode.UNAUTHORIZED)

        try:
            subscription_plan = await self.subscriptions.get_user_subscription_plan(user)
        except Exception as e:
            log_exception_with_context(
                logger, "Error fetching user subscription plan", e, user_id=user_id
            )
            raise RPCError(
                ErrorCode.INTERNAL_SERVER_ERROR, "Error fetching user subscription plan"
            ) from e

        try:
            if subscription_plan.is_subscribed and user.stripe_customer_id:
                url = await self.payments.create_billing_portal_session(
                    customer_id=user.stripe_customer_id,
                    return_url=self.billing_url,
                )
                return StripeSessionResponse(url=url)

            plan = self.settings.billing.get_plan(CHECKOUT_PLAN_NAME)
            price_id = plan.price_id(self.settings.is_production) if plan else None
            if not price_id:
                raise PaymentProviderError(
                    f"No price configured for plan {CHECKOUT_PLAN_NAME}",
                    operation="checkout",
                )

            url = await self.payments.create_checkout_session(
                customer_email=user.email,
                price_id=price_id,
                success_url=self.billing_url,
                cancel_url=self.billing_url,
                metadata={"userId": user_id},
            )
            return StripeSessionResponse(url=url)
        except Exception as e:
            log_exception_with_context(logger, "Error creating Stripe session", e, user_id=user_id)
            raise RPCError(
                ErrorCode.INTERNAL_SERVER_ERROR, "Failed to create Stripe session"
            ) from e

    async def get_subscription_plan(self, user_id: str) -> SubscriptionPlanResponse:
        """
        Get the caller's effective subscription plan.

        Raises:
            RPCError(UNAUTHORIZED): If the user row does not exist
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise RPCError(ErrorCode.UNAUTHORIZED)

        subscription_plan = await self.subscriptions.get_user_subscription_plan(user)
        plan = subscription_plan.plan
        return SubscriptionPlanResponse(
            name=plan.name,
            slug=plan.slug,
            quota=plan.quota,
            pages_per_pdf=plan.pages_per_pdf,
            price_amount=plan.price_amount,
            is_subscribed=subscription_plan.is_subscribed,
            is_canceled=subscription_plan.is_canceled,
            stripe_customer_id=subscription_plan.stripe_customer_id,
            stripe_subscription_id=subscription_plan.stripe_subscription_id,
            stripe_current_period_end=subscription_plan.stripe_current_period_end,
        )
