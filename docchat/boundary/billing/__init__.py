"""
Payment provider boundary.

Exports: PaymentProvider, StripePaymentProvider, ProviderSubscription
"""

from .payment_provider import PaymentProvider, ProviderSubscription, StripePaymentProvider

__all__ = ["PaymentProvider", "ProviderSubscription", "StripePaymentProvider"]
