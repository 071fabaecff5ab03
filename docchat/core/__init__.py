"""
Core business logic module.

Contains the exception hierarchy shared by services and the RPC router.
"""

from docchat.core.exceptions import (
    DocChatException,
    ErrorCode,
    PaymentProviderError,
    RPCError,
    StorageError,
)

__all__ = [
    "DocChatException",
    "ErrorCode",
    "PaymentProviderError",
    "RPCError",
    "StorageError",
]
