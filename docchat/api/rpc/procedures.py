"""
Application procedures.

Routes: authCallback, getUserFiles, deleteFile, getFile, getFileUploadStatus,
getFileMessages, createStripeSession, getSubscriptionPlan

Dependencies: docchat.application.services, docchat.models
System role: RPC procedure table
"""

from docchat.api.rpc.router import ProcedureContext, ProcedureRouter
from docchat.application.services import (
    AuthService,
    BillingService,
    FileService,
    MessageService,
)
from docchat.core.exceptions import ErrorCode, RPCError
from docchat.models.auth import AuthCallbackResponse
from docchat.models.billing import StripeSessionResponse, SubscriptionPlanResponse
from docchat.models.file import (
    DeleteFileInput,
    FileResponse,
    FileUploadStatusInput,
    FileUploadStatusResponse,
    FileWithMessageCountResponse,
    GetFileInput,
)
from docchat.models.message import FileMessagesInput, FileMessagesResponse

app_router = ProcedureRouter()


@app_router.query("authCallback", private=False)
async def auth_callback(ctx: ProcedureContext, _: None) -> AuthCallbackResponse:
    """Provision the local user row after login."""
    identity = await ctx.resolve_identity()
    if identity is None or not identity.id or not identity.email:
        raise RPCError(ErrorCode.UNAUTHORIZED)

    await AuthService(db=ctx.db).ensure_user(identity.id, identity.email)
    return AuthCallbackResponse(success=True)


@app_router.query("getUserFiles")
async def get_user_files(
    ctx: ProcedureContext, _: None
) -> list[FileWithMessageCountResponse]:
    """List the caller's files with message counts."""
    service = FileService(db=ctx.db, storage=ctx.storage)
    return await service.list_user_files(ctx.user_id)


@app_router.mutation("deleteFile", input_model=DeleteFileInput)
async def delete_file(ctx: ProcedureContext, data: DeleteFileInput) -> FileResponse:
    """Delete one of the caller's files."""
    service = FileService(db=ctx.db, storage=ctx.storage)
    return await service.delete_file(ctx.user_id, data.id)


@app_router.mutation("getFile", input_model=GetFileInput)
async def get_file(ctx: ProcedureContext, data: GetFileInput) -> FileResponse:
    """Look up one of the caller's files by storage key."""
    service = FileService(db=ctx.db, storage=ctx.storage)
    return await service.get_file(ctx.user_id, data.key)


@app_router.query("getFileUploadStatus", input_model=FileUploadStatusInput)
async def get_file_upload_status(
    ctx: ProcedureContext, data: FileUploadStatusInput
) -> FileUploadStatusResponse:
    """Processing status of one of the caller's files."""
    service = FileService(db=ctx.db, storage=ctx.storage)
    return await service.get_upload_status(ctx.user_id, data.file_id)


@app_router.query("getFileMessages", input_model=FileMessagesInput)
async def get_file_messages(
    ctx: ProcedureContext, data: FileMessagesInput
) -> FileMessagesResponse:
    """One page of a file's chat history."""
    service = MessageService(
        db=ctx.db,
        default_limit=ctx.settings.pagination.infinite_query_limit,
    )
    return await service.get_file_messages(
        ctx.user_id,
        data.file_id,
        limit=data.limit,
        cursor=data.cursor,
    )


@app_router.mutation("createStripeSession")
async def create_stripe_session(ctx: ProcedureContext, _: None) -> StripeSessionResponse:
    """Hosted billing page for the caller."""
    service = BillingService(db=ctx.db, payments=ctx.payments, settings=ctx.settings)
    return await service.create_stripe_session(ctx.user_id)


@app_router.query("getSubscriptionPlan")
async def get_subscription_plan(
    ctx: ProcedureContext, _: None
) -> SubscriptionPlanResponse:
    service = BillingService(db=ctx.db, payments=ctx.payments, settings=ctx.settings)
    return await service.get_subscription_plan(ctx.user_id)
