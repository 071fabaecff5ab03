"""
Common response models and utilities.

Base model for camelCase RPC payloads and the success/error envelopes.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RPCModel(BaseModel):
    """Base for RPC inputs and outputs; snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RPCResultData(BaseModel):
    """Wrapper holding procedure output."""

    data: Any = None


class RPCSuccessResponse(BaseModel):
    """Success envelope: {"result": {"data": ...}}."""

    result: RPCResultData


class RPCErrorBody(BaseModel):
    """Error payload visible to callers."""

    code: str = Field(description="Error kind, e.g. NOT_FOUND")
    message: str = Field(description="Human-readable message")


class RPCErrorResponse(BaseModel):
    """Error envelope: {"error": {"code": ..., "message": ...}}."""

    error: RPCErrorBody
