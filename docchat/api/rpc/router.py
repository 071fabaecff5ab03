"""
Procedure router.

Named query/mutation procedures with declared input schemas, a public or
private authorization level, and a single place where failures are turned
into classified RPC errors.

Call order for every procedure:
1. Lookup by name (NOT_FOUND) and kind check (METHOD_NOT_SUPPORTED)
2. Input validation (BAD_REQUEST)
3. Identity resolution for private procedures (UNAUTHORIZED)
4. Handler

Dependencies: pydantic, sqlalchemy, docchat.boundary, docchat.configs
System role: RPC dispatch core
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.auth.identity_resolver import Identity, IdentityResolver
from docchat.boundary.aws.s3_client import FileStorage
from docchat.boundary.billing.payment_provider import PaymentProvider
from docchat.configs import Settings
from docchat.core.exceptions import ErrorCode, RPCError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ProcedureKind(str, enum.Enum):
    """Queries read (GET), mutations write (POST)."""

    QUERY = "query"
    MUTATION = "mutation"


_UNRESOLVED = object()


@dataclass
class ProcedureContext:
    """
    Per-call context handed to procedure handlers.

    The session belongs to this call only; the collaborators are process-wide.
    """

    db: AsyncSession
    settings: Settings
    resolver: IdentityResolver
    storage: FileStorage
    payments: PaymentProvider
    token: str | None = None
    _identity: Any = field(default=_UNRESOLVED, init=False, repr=False)

    async def resolve_identity(self) -> Identity | None:
        """Resolve the caller's identity once per call."""
        if self._identity is _UNRESOLVED:
            self._identity = await self.resolver.resolve_identity(self.token)
        return self._identity

    @property
    def user_id(self) -> str:
        """
        Caller's user id; only valid inside private procedures.

        Raises:
            RPCError(UNAUTHORIZED): If identity was not resolved to an id
        """
        identity = None if self._identity is _UNRESOLVED else self._identity
        if identity is None or not identity.id:
            raise RPCError(ErrorCode.UNAUTHORIZED)
        return identity.id


Handler = Callable[[ProcedureContext, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Procedure:
    """A registered procedure."""

    name: str
    kind: ProcedureKind
    handler: Handler
    input_model: type[BaseModel] | None = None
    private: bool = True


class ProcedureRouter:
    """
    Registry of procedures addressed by name.

    Usage:
        router = ProcedureRouter()

        @router.query("getFile", input_model=GetFileInput)
        async def get_file(ctx, data): ...
    """

    def __init__(self) -> None:
        self._procedures: dict[str, Procedure] = {}

    @property
    def procedures(self) -> dict[str, Procedure]:
        """Registered procedures by name."""
        return dict(self._procedures)

    def register(self, procedure: Procedure) -> Procedure:
        """
        Register a procedure.

        Raises:
            ValueError: If the name is already taken
        """
        if procedure.name in self._procedures:
            raise ValueError(f"Procedure already registered: {procedure.name}")
        self._procedures[procedure.name] = procedure
        return procedure

    def _decorator(
        self,
        kind: ProcedureKind,
        name: str,
        input_model: type[BaseModel] | None,
        private: bool,
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.register(
                Procedure(
                    name=name,
                    kind=kind,
                    handler=handler,
                    input_model=input_model,
                    private=private,
                )
            )
            return handler

        return decorator

    def query(
        self,
        name: str,
        input_model: type[BaseModel] | None = None,
        private: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a query procedure."""
        return self._decorator(ProcedureKind.QUERY, name, input_model, private)

    def mutation(
        self,
        name: str,
        input_model: type[BaseModel] | None = None,
        private: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a mutation procedure."""
        return self._decorator(ProcedureKind.MUTATION, name, input_model, private)

    def resolve(self, name: str, kind: ProcedureKind) -> Procedure:
        """
        Find a procedure and check it is called the right way.

        Raises:
            RPCError(NOT_FOUND): Unknown procedure
            RPCError(METHOD_NOT_SUPPORTED): Query called as mutation or vice versa
        """
        procedure = self._procedures.get(name)
        if procedure is None:
            raise RPCError(ErrorCode.NOT_FOUND, f"No procedure found on path \"{name}\"")
        if procedure.kind != kind:
            raise RPCError(
                ErrorCode.METHOD_NOT_SUPPORTED,
                f"Unsupported {kind.value} call to {procedure.kind.value} \"{name}\"",
            )
        return procedure

    async def call(
        self,
        name: str,
        kind: ProcedureKind,
        raw_input: Any,
        ctx: ProcedureContext,
    ) -> Any:
        """
        Validate, authorize and run a procedure.

        Args:
            name: Procedure name
            kind: How the procedure was invoked
            raw_input: Decoded JSON input, None when absent
            ctx: Call context

        Returns:
            Handler output (pydantic model, list of models, or plain data)

        Raises:
            RPCError: Classified failure
            ValidationError: Input failed the procedure's schema
            Exception: Anything the handler raises unclassified
        """
        return await self.run(self.resolve(name, kind), raw_input, ctx)

    async def run(self, procedure: Procedure, raw_input: Any, ctx: ProcedureContext) -> Any:
        """
        Validate, authorize and run an already resolved procedure.

        Raises:
            RPCError: UNAUTHORIZED for a private procedure without a caller
            ValidationError: Input failed the procedure's schema
        """
        data = None
        if procedure.input_model is not None:
            data = procedure.input_model.model_validate(
                raw_input if raw_input is not None else {}
            )

        if procedure.private:
            identity = await ctx.resolve_identity()
            if identity is None or not identity.id:
                raise RPCError(ErrorCode.UNAUTHORIZED)

        return await procedure.handler(ctx, data)


def classify_error(exc: Exception, procedure: str) -> RPCError:
    """
    Map any exception raised by a call to the error the caller sees.

    Unclassified exceptions are logged with their traceback and reported with
    a generic message.
    """
    if isinstance(exc, RPCError):
        if exc.code == ErrorCode.INTERNAL_SERVER_ERROR:
            logger.error(
                f"Procedure {procedure} failed: {exc.message}",
                extra={"procedure": procedure},
            )
        return exc

    if isinstance(exc, ValidationError):
        logger.info(
            f"Invalid input for {procedure}",
            extra={"procedure": procedure, "error_count": exc.error_count()},
        )
        return RPCError(ErrorCode.BAD_REQUEST, _validation_message(exc))

    logger.error(
        f"Unhandled error in procedure {procedure}",
        exc_info=exc,
        extra={"procedure": procedure, "error_type": type(exc).__name__},
    )
    return RPCError(ErrorCode.INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"]) or "input"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
