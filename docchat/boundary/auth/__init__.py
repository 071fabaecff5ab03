"""
Identity provider boundary.

Exports: Identity, IdentityResolver, JWTIdentityResolver
"""

from .identity_resolver import Identity, IdentityResolver, JWTIdentityResolver

__all__ = ["Identity", "IdentityResolver", "JWTIdentityResolver"]
