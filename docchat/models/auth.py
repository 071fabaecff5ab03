"""
Auth callback schemas.

Dependencies: pydantic
System role: Auth API contracts
"""

from docchat.models.common import RPCModel


class AuthCallbackResponse(RPCModel):
    """Response schema for the post-login callback."""

    success: bool = True
