"""Service orchestrators."""

from .auth_service import AuthService
from .billing_service import BillingService
from .file_service import FileService
from .message_service import MessageService
from .subscription_service import SubscriptionPlan, SubscriptionService

__all__ = [
    "AuthService",
    "BillingService",
    "FileService",
    "MessageService",
    "SubscriptionPlan",
    "SubscriptionService",
]
