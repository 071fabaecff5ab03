"""
File service orchestrator.

Owner-scoped file listing, lookup, status polling and deletion.

Dependencies: docchat.boundary.db.CRUD, docchat.boundary.aws
System role: File management orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.aws.s3_client import FileStorage
from docchat.boundary.db.CRUD.file_crud import file_crud
from docchat.boundary.db.models.file_model import FileModel, UploadStatus
from docchat.core.exceptions import ErrorCode, RPCError, StorageError
from docchat.models.file import (
    FileResponse,
    FileUploadStatusResponse,
    FileWithMessageCountResponse,
)

logger = logging.getLogger(__name__)


def map_file_to_response(file: FileModel) -> FileResponse:
    """Build the wire representation of a file row."""
    return FileResponse(
        id=file.id,
        name=file.name,
        url=file.url,
        key=file.key,
        upload_status=file.upload_status,
        user_id=file.user_id,
        created_at=file.created_at,
        updated_at=file.updated_at,
    )


class FileService:
    """
    File service orchestrator.

    Every method takes the caller's user id; files of other users are
    reported exactly like missing ones.
    """

    def __init__(self, db: AsyncSession, storage: FileStorage) -> None:
        """
        Initialize file service.

        Args:
            db: AsyncSession for file metadata
            storage: Storage client used to release deleted files
        """
        self.db = db
        self.storage = storage

    async def list_user_files(self, user_id: str) -> list[FileWithMessageCountResponse]:
        """
        List the user's files with message counts.

        Args:
            user_id: Caller's user id

        Returns:
            list[FileWithMessageCountResponse]: Newest first
        """
        rows = await file_crud.list_with_message_counts(self.db, user_id)
        return [
            FileWithMessageCountResponse(
                **map_file_to_response(file).model_dump(),
                message_count=count,
            )
            for file, count in rows
        ]

    async def get_file(self, user_id: str, key: str) -> FileResponse:
        """
        Get a file by storage key.

        Raises:
            RPCError(NOT_FOUND): If the user owns no file with that key
        """
        file = await file_crud.get_owned_by_key(self.db, key, user_id)
        if file is None:
            raise RPCError(ErrorCode.NOT_FOUND)
        return map_file_to_response(file)

    async def get_upload_status(self, user_id: str, file_id: str) -> FileUploadStatusResponse:
        """
        Get a file's processing status.

        A missing or foreign file reports PENDING rather than an error, so
        clients polling right after upload see a consistent answer.
        """
        file = await file_crud.get_owned_by_id(self.db, file_id, user_id)
        if file is None:
            return FileUploadStatusResponse(status=UploadStatus.PENDING)
        return FileUploadStatusResponse(status=file.upload_status)

    async def delete_file(self, user_id: str, file_id: str) -> FileResponse:
        """
        Delete a file row, then its storage object.

        Steps:
        1. Find the owned file (NOT_FOUND otherwise, no storage call)
        2. Delete the row and commit
        3. Delete the storage object

        A storage failure in step 3 leaves the row deleted and the object
        orphaned; the failure is logged and propagated.

        Args:
            user_id: Caller's user id
            file_id: File id

        Returns:
            FileResponse: The deleted file

        Raises:
            RPCError(NOT_FOUND): If the user owns no file with that id
            StorageError: If releasing the storage object fails
        """
        file = await file_crud.get_owned_by_id(self.db, file_id, user_id)
        if file is None:
            raise RPCError(ErrorCode.NOT_FOUND)

        deleted = map_file_to_response(file)

        if not await file_crud.delete_owned(self.db, file_id, user_id):
            # Deleted concurrently between lookup and delete
            raise RPCError(ErrorCode.NOT_FOUND)
        await self.db.commit()

        try:
            await self.storage.delete_file(deleted.key)
        except StorageError:
            logger.exception(
                "File row deleted but storage object was not released",
                extra={"file_id": file_id, "key": deleted.key},
            )
            raise

        logger.info("File deleted", extra={"file_id": file_id, "user_id": user_id})
        return deleted
