"""
API module.

FastAPI application, HTTP routers and the RPC procedure router.
"""
