"""RPC procedure router and the application's procedure table."""

from docchat.api.rpc.procedures import app_router
from docchat.api.rpc.router import (
    Procedure,
    ProcedureContext,
    ProcedureKind,
    ProcedureRouter,
    classify_error,
)

__all__ = [
    "Procedure",
    "ProcedureContext",
    "ProcedureKind",
    "ProcedureRouter",
    "app_router",
    "classify_error",
]
