"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, file storage, identity and payment providers).
Provides adapters and clients for infrastructure dependencies.
"""
