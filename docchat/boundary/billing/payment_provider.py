"""Payment provider abstraction layer.

Wraps the hosted payment provider behind the three calls billing needs:
a management portal session, a checkout session, and a subscription lookup.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSubscription:
    """Subscription state as reported by the provider."""

    id: str
    status: str
    cancel_at_period_end: bool


class PaymentProvider(ABC):
    """Abstract payment provider interface."""

    @abstractmethod
    async def create_billing_portal_session(self, customer_id: str, return_url: str) -> str:
        """Create a session for managing an existing subscription.

        Args:
            customer_id: Provider customer ID
            return_url: Where the portal sends the user back to

        Returns:
            Portal URL
        """
        pass

    @abstractmethod
    async def create_checkout_session(
        self,
        customer_email: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, Any],
    ) -> str:
        """Create a subscription checkout session.

        Args:
            customer_email: Email to prefill on checkout
            price_id: Provider price/plan ID
            success_url: Redirect after successful payment
            cancel_url: Redirect after abandoning checkout
            metadata: Custom metadata used to reconcile the payment later

        Returns:
            Checkout URL
        """
        pass

    @abstractmethod
    async def retrieve_subscription(self, subscription_id: str) -> ProviderSubscription:
        """Fetch a subscription by ID.

        Args:
            subscription_id: Provider subscription ID

        Returns:
            Current subscription state
        """
        pass


class StripePaymentProvider(PaymentProvider):
    """Stripe implementation of payment provider."""

    def __init__(self, api_key: str, api_version: str | None = None):
        """Initialize Stripe with the given secret key."""
        import stripe

        stripe.api_key = api_key
        if api_version:
            stripe.api_version = api_version
        self.stripe = stripe
        logger.info("Initialized Stripe payment provider")

    async def create_billing_portal_session(self, customer_id: str, return_url: str) -> str:
        """Create Stripe billing portal session."""
        session = await asyncio.to_thread(
            self.stripe.billing_portal.Session.create,
            customer=customer_id,
            return_url=return_url,
        )

        logger.info(
            f"Created Stripe billing portal session for customer {customer_id}",
            extra={"customer_id": customer_id},
        )
        return session.url

    async def create_checkout_session(
        self,
        customer_email: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, Any],
    ) -> str:
        """Create Stripe Checkout session for a single-plan subscription."""
        session = await asyncio.to_thread(
            self.stripe.checkout.Session.create,
            success_url=success_url,
            cancel_url=cancel_url,
            payment_method_types=["card"],
            mode="subscription",
            customer_email=customer_email,
            billing_address_collection="required",
            line_items=[{"price": price_id, "quantity": 1}],
            metadata=metadata,
        )

        logger.info(
            f"Created Stripe checkout session {session.id}",
            extra={"session_id": session.id, "price_id": price_id, "metadata": metadata},
        )
        return session.url

    async def retrieve_subscription(self, subscription_id: str) -> ProviderSubscription:
        """Retrieve Stripe subscription."""
        subscription = await asyncio.to_thread(
            self.stripe.Subscription.retrieve, subscription_id
        )
        return ProviderSubscription(
            id=subscription.id,
            status=subscription.status,
            cancel_at_period_end=bool(subscription.cancel_at_period_end),
        )
