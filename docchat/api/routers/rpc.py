"""
RPC transport endpoints.

Routes: GET /trpc/{procedure}  (queries, input as ?input=<JSON>)
        POST /trpc/{procedure} (mutations, input as JSON body)

Dependencies: docchat.api.rpc, docchat.api.deps
System role: HTTP binding of the procedure router
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from docchat.api.deps.dependencies import get_procedure_context
from docchat.api.rpc import ProcedureContext, ProcedureKind, app_router, classify_error
from docchat.core.exceptions import ErrorCode, RPCError
from docchat.models.common import (
    RPCErrorBody,
    RPCErrorResponse,
    RPCResultData,
    RPCSuccessResponse,
)

router = APIRouter(prefix="/trpc", tags=["rpc"])


def _decode_input(raw: str | bytes | None) -> Any:
    """Decode JSON input; an empty payload means no input."""
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise RPCError(ErrorCode.BAD_REQUEST, "Input is not valid JSON") from e


def error_response(error: RPCError) -> JSONResponse:
    """Render an RPC error envelope with the matching HTTP status."""
    body = RPCErrorResponse(error=RPCErrorBody(code=error.code.value, message=error.message))
    return JSONResponse(status_code=error.code.http_status, content=body.model_dump())


async def rpc_error_handler(request: Request, exc: RPCError) -> JSONResponse:
    """Render RPC errors raised while building the call context."""
    return error_response(exc)


async def _dispatch(
    name: str,
    kind: ProcedureKind,
    raw_input: str | bytes | None,
    ctx: ProcedureContext,
) -> JSONResponse:
    try:
        # Unknown procedures are reported before malformed input
        procedure = app_router.resolve(name, kind)
        output = await app_router.run(procedure, _decode_input(raw_input), ctx)
    except Exception as e:
        return error_response(classify_error(e, name))

    body = RPCSuccessResponse(result=RPCResultData(data=jsonable_encoder(output)))
    return JSONResponse(status_code=200, content=body.model_dump())


@router.get("/{procedure}")
async def call_query(
    procedure: str,
    raw_input: str | None = Query(
        default=None, alias="input", description="JSON-encoded procedure input"
    ),
    ctx: ProcedureContext = Depends(get_procedure_context),
) -> JSONResponse:
    """Invoke a query procedure."""
    return await _dispatch(procedure, ProcedureKind.QUERY, raw_input, ctx)


@router.post("/{procedure}")
async def call_mutation(
    procedure: str,
    request: Request,
    ctx: ProcedureContext = Depends(get_procedure_context),
) -> JSONResponse:
    """Invoke a mutation procedure."""
    return await _dispatch(procedure, ProcedureKind.MUTATION, await request.body(), ctx)
